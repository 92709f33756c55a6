"""
Widgets for repeatable line groups.

A CollectionContainer holds one line per model-array element. Its first
child at binding time is the line template. Buttons and insert fields refer
to a collection through their ``dataField`` property.
"""

import logging
from enum import Enum
from typing import Any, Callable, Optional

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QLineEdit, QPushButton, QVBoxLayout, QWidget

from pyqt_formbind.forms.form_constants import CONSTANTS
from pyqt_formbind.protocols.field_markers import (
    add_class, get_classes, get_data_field, set_data_field,
)

logger = logging.getLogger(__name__)


class ButtonRole(Enum):
    """Collection affordances a button can trigger."""
    ADD = CONSTANTS.ADD_CLASS
    DELETE = CONSTANTS.DELETE_CLASS
    INSERT_ACTION = CONSTANTS.INSERT_ACTION_CLASS


class CollectionContainer(QWidget):
    """
    Container bound to a model array.

    Example:
        positions = CollectionContainer("data.positions")
        positions.layout().addWidget(line_template)
    """

    def __init__(self, data_field: str = "", parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        add_class(self, CONSTANTS.COLLECTION_CLASS)
        if data_field:
            set_data_field(self, data_field)

    def data_field(self) -> str:
        return get_data_field(self)


class CollectionButton(QPushButton):
    """Button triggering add, delete or insert for a collection."""

    def __init__(self, text: str = "", role: Optional[ButtonRole] = None,
                 data_field: str = "", parent=None):
        super().__init__(text, parent)
        if role is not None:
            add_class(self, role.value)
        if data_field:
            set_data_field(self, data_field)

    def role(self) -> Optional[ButtonRole]:
        classes = get_classes(self)
        for role in ButtonRole:
            if role.value in classes:
                return role
        return None

    def data_field(self) -> str:
        return get_data_field(self)

    def set_delete_hook(self, hook: Optional[Callable[[QWidget], Any]]) -> None:
        """
        Attach a veto hook to a delete button.

        The hook receives the line widget; returning False keeps the line.
        Stored as a property so cloned lines keep it.
        """
        self.setProperty(CONSTANTS.DELETE_HOOK_PROPERTY, hook)

    def delete_hook(self) -> Optional[Callable[[QWidget], Any]]:
        hook = self.property(CONSTANTS.DELETE_HOOK_PROPERTY)
        return hook if callable(hook) else None


class InsertField(QLineEdit):
    """
    Staging input for inserting externally supplied objects into a collection.

    A picker (autocomplete, search dialog) stages the chosen object with
    stage() and calls request_insert(); the collection manager listens to
    insertRequested.
    """

    insertRequested = pyqtSignal(object)

    def __init__(self, data_field: str = "", parent=None):
        super().__init__(parent)
        add_class(self, CONSTANTS.INSERT_CLASS)
        if data_field:
            set_data_field(self, data_field)
        self._staged: Any = None
        self._before_insert: Optional[Callable[[Any], Any]] = None

    def data_field(self) -> str:
        return get_data_field(self)

    def stage(self, obj: Any, text: Optional[str] = None) -> None:
        self._staged = obj
        if text is not None:
            self.setText(text)

    def staged(self) -> Any:
        return self._staged

    def set_before_insert(self, hook: Optional[Callable[[Any], Any]]) -> None:
        """Hook transforming the object before insertion; returning None vetoes."""
        self._before_insert = hook

    def before_insert(self) -> Optional[Callable[[Any], Any]]:
        return self._before_insert

    def request_insert(self, obj: Any = None) -> None:
        self.insertRequested.emit(obj)

    def reset(self) -> None:
        self.clear()
        self._staged = None
        self.setFocus()
