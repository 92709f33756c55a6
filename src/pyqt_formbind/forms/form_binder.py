"""
FormBinder: the public binding surface of one form.

Composes the Extractor, Renderer, DiffEngine and CollectionManager over a
widget root and the model bound to it.
"""

import copy
import logging
from typing import Any, Dict, List, Optional

from PyQt6.QtCore import QObject, pyqtSignal
from PyQt6.QtWidgets import QAbstractButton, QWidget

from pyqt_formbind.core.emptiness import is_empty
from pyqt_formbind.core.path_resolver import PathResolver, strip_prefix
from pyqt_formbind.protocols import EditLockable
from pyqt_formbind.protocols.field_markers import get_classes, get_prefix, has_class, mark_invalid
from pyqt_formbind.protocols.form_config import FormBindConfig, get_form_config
from .collection_manager import CollectionManager, LineTransform
from .diff_engine import MISSING, DiffEngine, reference_value
from .extractor import Extractor
from .field_dispatcher import FieldDispatcher
from .field_scanner import FieldScanner, iter_widgets
from .form_constants import CONSTANTS
from .renderer import Renderer

logger = logging.getLogger(__name__)

_COLLECTION_BUTTON_CLASSES = (CONSTANTS.ADD_CLASS, CONSTANTS.DELETE_CLASS, CONSTANTS.INSERT_ACTION_CLASS)


class FormBinder(QObject):
    """
    Binds a model object to the fields of a widget tree.

    Example:
        binder = FormBinder(form, data={"name": "Ann", "positions": []})
        binder.validationRequested.connect(my_validator)
        ...
        model = binder.get()        # None while a field is invalid
        if model is not None and not binder.equals(saved):
            save(model)

    Signals:
        lineAdded(line, bound), lineDeleted(line, bound), lineInserted(line, bound):
            collection notifications
        validationRequested(widget): a field should be (re)validated; the
            validator marks the field with mark_invalid() before returning
    """

    lineAdded = pyqtSignal(object, object)
    lineDeleted = pyqtSignal(object, object)
    lineInserted = pyqtSignal(object, object)
    validationRequested = pyqtSignal(object)

    def __init__(self, root: QWidget, data: Any = None, prefix: Optional[str] = None,
                 config: Optional[FormBindConfig] = None, registry=None, name: Optional[str] = None):
        """
        Initialize the binder.

        Args:
            root: Form root widget
            data: Model to bind; filled into the form right away
            prefix: Name prefix of the form's fields (config prefix if None);
                a ``prefix`` property on the root wins over the default
            config: Binding configuration (global config if None)
            registry: Optional BinderRegistry to register with
            name: Registry name (root objectName if None)
        """
        super().__init__(root)
        self._root = root
        self._config = config or get_form_config()
        self._prefix = self._resolve_prefix(prefix)
        self._data = data
        self._edit_locked = False
        self._registry = registry
        self._name = name if name is not None else root.objectName()

        self._collections = CollectionManager(self)
        self._collections.lineAdded.connect(self.lineAdded.emit)
        self._collections.lineDeleted.connect(self.lineDeleted.emit)
        self._collections.lineInserted.connect(self.lineInserted.emit)
        self._collections.initialize(root)

        if data is not None:
            self.fill(data)
        else:
            Renderer.fill_data(root, {}, self._prefix, inputs=False)
        if registry is not None:
            registry.register(self._name, self)

    def _resolve_prefix(self, prefix: Optional[str]) -> str:
        if prefix is None:
            prefix = self._config.prefix
        root_prefix = get_prefix(self._root)
        if root_prefix and (not prefix or prefix == CONSTANTS.DEFAULT_PREFIX):
            return root_prefix
        return prefix

    # ==================== PROPERTIES ====================

    @property
    def root(self) -> QWidget:
        return self._root

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def name(self) -> str:
        return self._name

    @property
    def collections(self) -> CollectionManager:
        return self._collections

    # ==================== MODEL ACCESS ====================

    def get_data(self) -> Any:
        """Return the bound model, synthesizing an empty one if none is bound."""
        if self._data is None:
            self._data = {}
        return self._data

    def get(self, ignore_invalid: bool = False) -> Optional[Dict[str, Any]]:
        """
        Extract the form into a copy of the bound model.

        Args:
            ignore_invalid: Return the model even if fields are marked invalid

        Returns:
            The extracted model, or None if a field is invalid
        """
        model = copy.deepcopy(self.get_data())
        if not isinstance(model, dict):
            model = {}

        Extractor.extract(self._root, self._prefix, model,
                          on_validate=self.validationRequested.emit, descend_collections=False)
        invalid = self._invalid_fields(self._root, descend_collections=False)

        for binding in self._collections.bindings(self._prefix):
            elements = []
            for line in binding.lines:
                element = Extractor.extract(line.widget, binding.line_prefix, {}, seed=line.bound,
                                            on_validate=self.validationRequested.emit)
                if is_empty(element):
                    for widget in FieldScanner.invalid_widgets(line.widget):
                        mark_invalid(widget, False)
                    continue
                invalid.extend(self._invalid_fields(line.widget))
                elements.append(element)
            PathResolver.set(model, strip_prefix(binding.field_name, self._prefix), elements)

        if invalid and not ignore_invalid:
            logger.debug(f"Form '{self._name}' has {len(invalid)} invalid field(s)")
            if self._config.focus_invalid:
                invalid[0].setFocus()
            return None
        return model

    def _invalid_fields(self, root: QWidget, descend_collections: bool = True) -> List[QWidget]:
        return FieldScanner.invalid_widgets(
            root, descend_collections, visible_only=not self._config.validate_hidden
        )

    def fill(self, model: Any) -> None:
        """Bind ``model`` and render it, replacing everything shown before."""
        logger.info(f"Filling form '{self._name}'")
        self._data = model
        self.clear()
        Renderer.fill_data(self._root, model, self._prefix)
        if not model:
            return
        for binding in self._collections.bindings(self._prefix):
            data = PathResolver.get(model, strip_prefix(binding.field_name, self._prefix))
            self._collections.fill_list(binding.container, data, binding.line_prefix)

    def fill_list(self, container: QWidget, data: Any, prefix: Optional[str] = None,
                  line_transform: Optional[LineTransform] = None) -> int:
        """Fill one collection container; see CollectionManager.fill_list."""
        return self._collections.fill_list(container, data, prefix, line_transform)

    def clear(self) -> None:
        """Empty every input field and collection of the form; the bound model is kept."""
        Renderer.clear_fields(self._root, self._prefix)
        for binding in self._collections.bindings(self._prefix):
            self._collections.clear(binding)

    def equals(self, model: Any) -> bool:
        """Return True if the form shows exactly ``model`` and no field is invalid."""
        if DiffEngine.differs(self._root, self._prefix, model, descend_collections=False):
            return False
        if FieldScanner.invalid_widgets(self._root):
            return False

        for binding in self._collections.bindings(self._prefix):
            reference = reference_value(model, strip_prefix(binding.field_name, self._prefix))
            if reference is MISSING or reference is None:
                if binding.lines:
                    return False
                continue
            if not isinstance(reference, list) or len(reference) != len(binding.lines):
                logger.debug(f"Collection '{binding.field_name}' differs in size")
                return False
            for line, element in zip(binding.lines, reference):
                if DiffEngine.differs(line.widget, binding.line_prefix, element):
                    return False
        return True

    # ==================== VALIDATION AND EDITING ====================

    def validate(self) -> bool:
        """Request validation of every field with a validation tag; True if none is invalid."""
        for widget in iter_widgets(self._root):
            if get_classes(widget) & self._config.validation_classes:
                self.validationRequested.emit(widget)
        return not self._invalid_fields(self._root)

    def prevent_editing(self, prevent: Optional[bool] = None) -> None:
        """
        Lock or unlock every input field and collection button.

        Args:
            prevent: True to lock, False to unlock, None to toggle
        """
        if prevent is None:
            prevent = not self._edit_locked
        elif prevent == self._edit_locked:
            return
        self._edit_locked = prevent

        for widget in iter_widgets(self._root):
            if isinstance(widget, EditLockable):
                FieldDispatcher.set_edit_locked(widget, prevent)
            elif isinstance(widget, QAbstractButton) and any(
                has_class(widget, tag) for tag in _COLLECTION_BUTTON_CLASSES
            ):
                widget.setEnabled(not prevent)

    def is_edit_locked(self) -> bool:
        return self._edit_locked

    # ==================== LIFECYCLE ====================

    def rescan(self) -> None:
        """Bind collections and wire buttons added to the form since initialization."""
        self._collections.initialize(self._root)

    def destroy(self) -> None:
        """Unregister from the registry and forget all collection bindings."""
        if self._registry is not None:
            self._registry.unregister(self._name, self)
            self._registry = None
        self._collections.reset()
        logger.info(f"Destroyed binder '{self._name}'")
