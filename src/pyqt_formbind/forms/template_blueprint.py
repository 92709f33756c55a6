"""
Immutable blueprints of widget subtrees.

Qt widgets cannot be cloned. A collection captures its line template once as
a blueprint: widget classes, object names, dynamic properties (binding
markers and attached hooks), the user-visible state of common widgets and the
layout structure. Every instantiation builds a fresh, independent widget tree
from it; copied property values never share mutable state.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple

from PyQt6.QtCore import QRect
from PyQt6.QtWidgets import (
    QAbstractButton, QAbstractScrollArea, QAbstractSpinBox, QBoxLayout, QComboBox,
    QFormLayout, QGridLayout, QGroupBox, QLabel, QLayout, QLineEdit, QPlainTextEdit,
    QSizePolicy, QSpacerItem, QTextEdit, QWidget,
)

from pyqt_formbind.core.exceptions import BindingError
from pyqt_formbind.protocols import BoundField

logger = logging.getLogger(__name__)

# Widgets whose children are Qt internals (viewports, popups, editors)
_LEAF_TYPES = (QLabel, QAbstractButton, QLineEdit, QComboBox, QAbstractSpinBox, QAbstractScrollArea)

_QT_INTERNAL_PROPERTY_PREFIX = "_q_"


def _copy_value(value: Any) -> Any:
    """Copy a property value; callables (attached hooks) are shared, data is not."""
    if callable(value):
        return value
    return copy.deepcopy(value)


def _is_leaf(widget: QWidget) -> bool:
    return isinstance(widget, _LEAF_TYPES) or isinstance(widget, BoundField)


def _capture_state(widget: QWidget) -> Dict[str, Any]:
    """Capture the user-visible state of common widget types."""
    if isinstance(widget, QLabel):
        return {"text": widget.text(), "text_format": widget.textFormat()}
    if isinstance(widget, QLineEdit):
        return {
            "text": widget.text(),
            "placeholder": widget.placeholderText(),
            "read_only": widget.isReadOnly(),
        }
    if isinstance(widget, QAbstractButton):
        return {"text": widget.text(), "checkable": widget.isCheckable(), "checked": widget.isChecked()}
    if isinstance(widget, QComboBox):
        return {
            "items": [(widget.itemText(i), _copy_value(widget.itemData(i))) for i in range(widget.count())],
            "editable": widget.isEditable(),
            "current_index": widget.currentIndex(),
        }
    if isinstance(widget, (QPlainTextEdit, QTextEdit)):
        return {"text": widget.toPlainText(), "read_only": widget.isReadOnly()}
    if isinstance(widget, QGroupBox):
        return {"title": widget.title(), "checkable": widget.isCheckable(), "checked": widget.isChecked()}
    return {}


def _apply_state(widget: QWidget, state: Dict[str, Any]) -> None:
    if not state:
        return
    if isinstance(widget, QLabel):
        widget.setTextFormat(state["text_format"])
        widget.setText(state["text"])
    elif isinstance(widget, QLineEdit):
        widget.setText(state["text"])
        widget.setPlaceholderText(state["placeholder"])
        widget.setReadOnly(state["read_only"])
    elif isinstance(widget, QAbstractButton):
        widget.setText(state["text"])
        widget.setCheckable(state["checkable"])
        widget.setChecked(state["checked"])
    elif isinstance(widget, QComboBox):
        widget.clear()
        for text, data in state["items"]:
            widget.addItem(text, _copy_value(data))
        widget.setEditable(state["editable"])
        widget.setCurrentIndex(state["current_index"])
    elif isinstance(widget, QPlainTextEdit):
        widget.setPlainText(state["text"])
        widget.setReadOnly(state["read_only"])
    elif isinstance(widget, QTextEdit):
        widget.setPlainText(state["text"])
        widget.setReadOnly(state["read_only"])
    elif isinstance(widget, QGroupBox):
        widget.setTitle(state["title"])
        widget.setCheckable(state["checkable"])
        widget.setChecked(state["checked"])


@dataclass(frozen=True)
class LayoutItemBlueprint:
    """One item of a layout: a widget, a nested layout or a spacer."""
    widget: Optional["WidgetBlueprint"] = None
    layout: Optional["LayoutBlueprint"] = None
    spacer: Optional[Tuple[int, int, QSizePolicy.Policy, QSizePolicy.Policy]] = None
    stretch: int = 0
    # QGridLayout: (row, column, row_span, column_span); QFormLayout: (row, role)
    position: Optional[Tuple[Any, ...]] = None


@dataclass(frozen=True)
class LayoutBlueprint:
    layout_type: type
    direction: Optional[QBoxLayout.Direction]
    spacing: int
    margins: Tuple[int, int, int, int]
    items: Tuple[LayoutItemBlueprint, ...]

    @classmethod
    def capture(cls, layout: QLayout) -> "LayoutBlueprint":
        items = []
        for index in range(layout.count()):
            item = layout.itemAt(index)
            position = None
            stretch = 0
            if isinstance(layout, QGridLayout):
                position = tuple(layout.getItemPosition(index))
            elif isinstance(layout, QFormLayout):
                position = tuple(layout.getItemPosition(index))
            elif isinstance(layout, QBoxLayout):
                stretch = layout.stretch(index)

            if item.widget() is not None:
                items.append(LayoutItemBlueprint(
                    widget=WidgetBlueprint.capture(item.widget()), stretch=stretch, position=position,
                ))
            elif item.layout() is not None:
                items.append(LayoutItemBlueprint(
                    layout=LayoutBlueprint.capture(item.layout()), stretch=stretch, position=position,
                ))
            elif item.spacerItem() is not None:
                spacer = item.spacerItem()
                hint = spacer.sizeHint()
                policy = spacer.sizePolicy()
                items.append(LayoutItemBlueprint(
                    spacer=(hint.width(), hint.height(), policy.horizontalPolicy(), policy.verticalPolicy()),
                    stretch=stretch, position=position,
                ))

        margins = layout.contentsMargins()
        direction = layout.direction() if isinstance(layout, QBoxLayout) else None
        return cls(
            layout_type=type(layout),
            direction=direction,
            spacing=layout.spacing(),
            margins=(margins.left(), margins.top(), margins.right(), margins.bottom()),
            items=tuple(items),
        )

    def create(self) -> QLayout:
        if self.layout_type is QBoxLayout:
            return QBoxLayout(self.direction)
        return self.layout_type()

    def populate(self, layout: QLayout) -> None:
        """Build the items of this blueprint into ``layout``."""
        layout.setSpacing(self.spacing)
        layout.setContentsMargins(*self.margins)
        for item in self.items:
            self._add_item(layout, item)

    def _add_item(self, layout: QLayout, item: LayoutItemBlueprint) -> None:
        if item.widget is not None:
            child = item.widget.instantiate()
            if isinstance(layout, QGridLayout):
                layout.addWidget(child, *item.position)
            elif isinstance(layout, QFormLayout):
                layout.setWidget(item.position[0], item.position[1], child)
            elif isinstance(layout, QBoxLayout):
                layout.addWidget(child, item.stretch)
            else:
                layout.addWidget(child)
        elif item.layout is not None:
            nested = item.layout.create()
            item.layout.populate(nested)
            if isinstance(layout, QGridLayout):
                layout.addLayout(nested, *item.position)
            elif isinstance(layout, QFormLayout):
                layout.setLayout(item.position[0], item.position[1], nested)
            elif isinstance(layout, QBoxLayout):
                layout.addLayout(nested, item.stretch)
            else:
                layout.addItem(nested)
        elif item.spacer is not None:
            spacer = QSpacerItem(*item.spacer)
            if isinstance(layout, QGridLayout):
                layout.addItem(spacer, *item.position)
            elif isinstance(layout, QFormLayout):
                layout.setItem(item.position[0], item.position[1], spacer)
            elif isinstance(layout, QBoxLayout):
                layout.addSpacerItem(spacer)
                layout.setStretch(layout.count() - 1, item.stretch)
            else:
                layout.addItem(spacer)


def _layout_widgets(layout: QLayout, found: Set[int]) -> Set[int]:
    """Collect ids of all widgets managed by ``layout`` (nested layouts included)."""
    for index in range(layout.count()):
        item = layout.itemAt(index)
        if item.widget() is not None:
            found.add(id(item.widget()))
        elif item.layout() is not None:
            _layout_widgets(item.layout(), found)
    return found


@dataclass(frozen=True)
class WidgetBlueprint:
    """
    Structural description of a widget subtree.

    Example:
        blueprint = WidgetBlueprint.capture(line_widget)
        first = blueprint.instantiate()
        second = blueprint.instantiate()   # independent of first
    """
    widget_type: type
    object_name: str
    hidden: bool
    enabled: bool
    tool_tip: str
    properties: Tuple[Tuple[str, Any], ...]
    state: Dict[str, Any] = field(default_factory=dict)
    layout: Optional[LayoutBlueprint] = None
    free_children: Tuple[Tuple["WidgetBlueprint", Tuple[int, int, int, int]], ...] = ()

    @classmethod
    def capture(cls, widget: QWidget, root: bool = False) -> "WidgetBlueprint":
        """
        Capture ``widget`` and its subtree.

        Args:
            widget: Widget to describe
            root: The widget is the template root; its own hidden state is ignored
        """
        properties = []
        for raw_name in widget.dynamicPropertyNames():
            name = bytes(raw_name).decode("utf-8")
            if name.startswith(_QT_INTERNAL_PROPERTY_PREFIX):
                continue
            properties.append((name, _copy_value(widget.property(name))))

        layout = None
        free_children: List[Tuple[WidgetBlueprint, Tuple[int, int, int, int]]] = []
        if not _is_leaf(widget):
            managed: Set[int] = set()
            if widget.layout() is not None:
                layout = LayoutBlueprint.capture(widget.layout())
                managed = _layout_widgets(widget.layout(), managed)
            for child in widget.children():
                if not isinstance(child, QWidget) or id(child) in managed or child.isWindow():
                    continue
                geometry = child.geometry()
                free_children.append((
                    cls.capture(child),
                    (geometry.x(), geometry.y(), geometry.width(), geometry.height()),
                ))

        return cls(
            widget_type=type(widget),
            object_name=widget.objectName(),
            hidden=False if root else widget.isHidden(),
            enabled=widget.isEnabled(),
            tool_tip=widget.toolTip(),
            properties=tuple(properties),
            state=_capture_state(widget),
            layout=layout,
            free_children=tuple(free_children),
        )

    def instantiate(self) -> QWidget:
        """Build a fresh widget tree from this blueprint."""
        try:
            widget = self.widget_type()
        except TypeError as e:
            raise BindingError(
                f"{self.widget_type.__name__} must be constructible without arguments "
                f"to be used in a collection template"
            ) from e

        widget.setObjectName(self.object_name)
        for name, value in self.properties:
            widget.setProperty(name, _copy_value(value))
        _apply_state(widget, self.state)

        if self.layout is not None:
            layout = widget.layout()
            if layout is None:
                layout = self.layout.create()
                widget.setLayout(layout)
            self.layout.populate(layout)

        for child_blueprint, geometry in self.free_children:
            child = child_blueprint.instantiate()
            child.setParent(widget)
            child.setGeometry(QRect(*geometry))

        widget.setEnabled(self.enabled)
        widget.setToolTip(self.tool_tip)
        if self.hidden:
            widget.setHidden(True)
        return widget
