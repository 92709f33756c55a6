"""
Collection management for repeated line groups.

Each collection container is bound to a model array. Its first child at
initialization is captured once as a WidgetBlueprint and removed; every line
is a fresh instantiation of that blueprint. The bound element of a line lives
in the binding's bookkeeping, never inside the model or the widget. Bindings
are kept per container, so several managers over one form share templates
and lines.
"""

import logging
import weakref
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from PyQt6.QtCore import QObject, pyqtSignal
from PyQt6.QtWidgets import QAbstractButton, QVBoxLayout, QWidget

from pyqt_formbind.core.path_resolver import strip_prefix
from pyqt_formbind.protocols.field_markers import add_class, get_data_field, has_class
from pyqt_formbind.widgets.collection_widgets import InsertField
from .field_scanner import iter_widgets
from .form_constants import CONSTANTS
from .renderer import Renderer
from .template_blueprint import WidgetBlueprint

logger = logging.getLogger(__name__)

LineTransform = Callable[[QWidget, Any], Any]

# One binding per container, shared by every manager binding that container
_CONTAINER_BINDINGS: "weakref.WeakKeyDictionary[QWidget, CollectionBinding]" = weakref.WeakKeyDictionary()


@dataclass
class CollectionLine:
    """A live line and the array element it represents."""
    widget: QWidget
    bound: Any
    external: bool = False


@dataclass
class CollectionBinding:
    """A container bound to a model array."""
    container: QWidget
    field_name: str
    template: Optional[WidgetBlueprint]
    lines: List[CollectionLine] = field(default_factory=list)

    @property
    def line_prefix(self) -> str:
        """Name prefix of the fields inside a line: the field name without its first segment."""
        _, _, rest = self.field_name.partition(CONSTANTS.DOT_SEPARATOR)
        return rest or self.field_name

    def line_for(self, widget: QWidget) -> Optional[CollectionLine]:
        for line in self.lines:
            if line.widget is widget:
                return line
        return None


def _detach(widget: QWidget) -> None:
    """Take a widget out of its parent's layout and schedule its deletion."""
    parent = widget.parentWidget()
    if parent is not None and parent.layout() is not None:
        parent.layout().removeWidget(widget)
    widget.setParent(None)
    widget.deleteLater()


class CollectionManager(QObject):
    """
    Owns the collection bindings of one form.

    Signals carry ``(line_widget, bound_element)``.

    Example:
        manager = CollectionManager()
        manager.initialize(form)
        manager.fill_list(positions, [{"amount": 1}], "positions")
    """

    lineAdded = pyqtSignal(object, object)
    lineDeleted = pyqtSignal(object, object)
    lineInserted = pyqtSignal(object, object)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._bindings: List[CollectionBinding] = []

    # ==================== INITIALIZATION ====================

    def initialize(self, root: QWidget) -> None:
        """Bind every collection container under ``root`` and wire its buttons."""
        for widget in list(iter_widgets(root)):
            if has_class(widget, CONSTANTS.COLLECTION_CLASS):
                self.init_container(widget)
        self.wire_buttons(root)

    def init_container(self, container: QWidget) -> CollectionBinding:
        """
        Bind ``container``, capturing its first child as the line template.

        The template is captured once per container: re-initializing, also from
        another manager, returns the existing binding.
        """
        binding = self.binding_for_container(container)
        if binding is not None:
            return binding

        binding = _CONTAINER_BINDINGS.get(container)
        if binding is not None:
            self._bindings.append(binding)
            return binding

        if container.layout() is None:
            QVBoxLayout(container)

        template_widget = self._first_child(container)
        template = None
        if template_widget is None:
            logger.warning(f"Collection '{get_data_field(container)}' has no line template")
        else:
            template = WidgetBlueprint.capture(template_widget, root=True)
            _detach(template_widget)

        binding = CollectionBinding(container, get_data_field(container), template)
        _CONTAINER_BINDINGS[container] = binding
        self._bindings.append(binding)
        logger.debug(f"Bound collection '{binding.field_name}'")
        return binding

    @staticmethod
    def _first_child(container: QWidget) -> Optional[QWidget]:
        layout = container.layout()
        if layout is not None:
            for index in range(layout.count()):
                widget = layout.itemAt(index).widget()
                if widget is not None:
                    return widget
        for child in container.children():
            if isinstance(child, QWidget) and not child.isWindow():
                return child
        return None

    def wire_buttons(self, root: QWidget) -> None:
        """Connect add buttons, insert fields and insert-action buttons once."""
        for widget in iter_widgets(root):
            if widget.property(CONSTANTS.WIRED_PROPERTY):
                continue
            if isinstance(widget, InsertField):
                widget.insertRequested.connect(
                    lambda obj, inserter=widget: self.insert(inserter.data_field(), obj, inserter)
                )
            elif isinstance(widget, QAbstractButton) and has_class(widget, CONSTANTS.ADD_CLASS):
                widget.clicked.connect(
                    lambda _checked=False, button=widget: self.add_line(get_data_field(button))
                )
            elif isinstance(widget, QAbstractButton) and has_class(widget, CONSTANTS.INSERT_ACTION_CLASS):
                widget.clicked.connect(
                    lambda _checked=False, button=widget: self.trigger_insert(button)
                )
            else:
                continue
            widget.setProperty(CONSTANTS.WIRED_PROPERTY, True)

    # ==================== LOOKUP ====================

    def bindings(self, prefix: Optional[str] = None) -> List[CollectionBinding]:
        """Bindings whose collection name carries ``prefix`` (all bindings for None/"")."""
        if not prefix:
            return list(self._bindings)
        return [b for b in self._bindings if strip_prefix(b.field_name, prefix)]

    def bindings_for(self, field_name: str) -> List[CollectionBinding]:
        """All containers registered under the same collection name."""
        return [b for b in self._bindings if b.field_name == field_name]

    def binding_for_container(self, container: QWidget) -> Optional[CollectionBinding]:
        for binding in self._bindings:
            if binding.container is container:
                return binding
        return None

    def reset(self) -> None:
        """Forget every binding; live lines stay where they are."""
        self._bindings.clear()

    # ==================== LINES ====================

    def clear(self, binding: CollectionBinding) -> None:
        """Remove every line of ``binding``."""
        for line in binding.lines:
            _detach(line.widget)
        binding.lines.clear()

    def fill_list(self, container: QWidget, data: Any, prefix: Optional[str] = None,
                  line_transform: Optional[LineTransform] = None) -> int:
        """
        Replace the lines of ``container`` with one line per element of ``data``.

        Args:
            container: Collection container (bound on first use)
            data: Model array; anything else leaves the container empty
            prefix: Render each line with this prefix; no rendering if empty
            line_transform: Called with (line_widget, element) before the line is
                added; returning False drops the line

        Returns:
            Number of lines in the container afterwards
        """
        binding = self.init_container(container)
        self.clear(binding)
        if not isinstance(data, list):
            logger.debug(f"Collection '{binding.field_name}' got non-list data {type(data).__name__}")
            return 0
        if binding.template is None:
            return 0

        for element in data:
            line = self._create_line(binding, element)
            if line_transform is not None and line_transform(line.widget, element) is False:
                logger.debug(f"Line of '{binding.field_name}' vetoed by line transform")
                line.widget.deleteLater()
                continue
            self._append(binding, line)
            if prefix:
                Renderer.fill_data(line.widget, element, prefix)
        return len(binding.lines)

    def add_line(self, field_name: str) -> List[CollectionLine]:
        """Append an empty line to every container of ``field_name``."""
        added = []
        for binding in self.bindings_for(field_name):
            if binding.template is None:
                continue
            line = self._create_line(binding, {})
            self._append(binding, line)
            Renderer.fill_data(line.widget, line.bound, binding.line_prefix)
            added.append(line)
            self.lineAdded.emit(line.widget, line.bound)
        if not added:
            logger.warning(f"No collection template for '{field_name}'")
        return added

    def insert(self, field_name: str, obj: Any = None,
               inserter: Optional[InsertField] = None) -> List[CollectionLine]:
        """
        Insert an externally supplied object as a new line.

        Args:
            field_name: Collection name
            obj: Object to insert; the inserter's staged object if None
            inserter: Insert field supplying the staged object and the
                before-insert hook; reset after a successful insert

        Returns:
            The inserted lines (empty if nothing was inserted)
        """
        if obj is None and inserter is not None:
            obj = inserter.staged()
        if obj is None:
            logger.debug(f"Nothing staged for '{field_name}'")
            return []

        hook = inserter.before_insert() if inserter is not None else None
        if hook is not None:
            obj = hook(obj)
            if obj is None:
                logger.debug(f"Insert into '{field_name}' vetoed")
                return []

        inserted = []
        for binding in self.bindings_for(field_name):
            if binding.template is None:
                continue
            line = self._create_line(binding, obj, external=True)
            Renderer.fill_data(line.widget, obj, binding.line_prefix)
            self._append(binding, line)
            inserted.append(line)
            self.lineInserted.emit(line.widget, line.bound)

        if inserter is not None:
            inserter.reset()
        return inserted

    def trigger_insert(self, button: QWidget) -> None:
        """Ask the insert field next to ``button`` to insert its staged object."""
        inserter = self._find_inserter(button)
        if inserter is None:
            logger.warning(f"No insert field for '{get_data_field(button)}'")
            return
        inserter.request_insert()

    @staticmethod
    def _find_inserter(button: QWidget) -> Optional[InsertField]:
        parent = button.parentWidget() or button
        data_field = get_data_field(button)
        fallback = None
        for widget in iter_widgets(parent, include_root=False):
            if not isinstance(widget, InsertField):
                continue
            if data_field and widget.data_field() == data_field:
                return widget
            if fallback is None:
                fallback = widget
        return fallback

    def delete_line(self, binding: CollectionBinding, line: CollectionLine,
                    button: Optional[QWidget] = None) -> bool:
        """
        Remove ``line`` unless the delete hook of ``button`` vetoes it.

        Returns:
            True if the line was removed
        """
        hook = button.property(CONSTANTS.DELETE_HOOK_PROPERTY) if button is not None else None
        if callable(hook) and hook(line.widget) is False:
            logger.debug(f"Delete in '{binding.field_name}' vetoed")
            return False
        if line not in binding.lines:
            return False

        binding.lines.remove(line)
        self.lineDeleted.emit(line.widget, line.bound)
        _detach(line.widget)
        return True

    def _create_line(self, binding: CollectionBinding, bound: Any,
                     external: bool = False) -> CollectionLine:
        widget = binding.template.instantiate()
        if external:
            add_class(widget, CONSTANTS.EXTERNAL_LINE_CLASS)
        return CollectionLine(widget, bound, external)

    def _append(self, binding: CollectionBinding, line: CollectionLine) -> None:
        binding.container.layout().addWidget(line.widget)
        binding.lines.append(line)
        self._wire_delete(binding, line)

    def _wire_delete(self, binding: CollectionBinding, line: CollectionLine) -> None:
        for widget in iter_widgets(line.widget):
            if isinstance(widget, QAbstractButton) and has_class(widget, CONSTANTS.DELETE_CLASS):
                widget.clicked.connect(
                    lambda _checked=False, button=widget: self.delete_line(binding, line, button)
                )
