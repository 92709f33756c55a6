"""
Binding markers stored on Qt objects.

Widgets declare how they bind through dynamic properties so the markers can
be targeted from style sheets and survive template cloning:

- ``class``: space separated kind tags, e.g. "number transient"
  (style sheet selector: ``QLineEdit[class~="invalid"]``)
- ``dataField``: full collection name on containers and buttons
- ``prefix``: form prefix on a form root
"""

from typing import FrozenSet, Iterable, Optional

from PyQt6.QtCore import QObject
from PyQt6.QtWidgets import QWidget

CLASS_PROPERTY = "class"
DATA_FIELD_PROPERTY = "dataField"
PREFIX_PROPERTY = "prefix"

INVALID_CLASS = "invalid"


def _refresh_style(obj: QObject) -> None:
    """Re-polish a widget so property selectors pick up the change."""
    if isinstance(obj, QWidget):
        style = obj.style()
        style.unpolish(obj)
        style.polish(obj)


def get_classes(obj: QObject) -> FrozenSet[str]:
    """Return the kind tags of an object."""
    value = obj.property(CLASS_PROPERTY)
    if not value:
        return frozenset()
    return frozenset(str(value).split())


def set_classes(obj: QObject, classes: Iterable[str]) -> None:
    obj.setProperty(CLASS_PROPERTY, " ".join(sorted(set(classes))))
    _refresh_style(obj)


def has_class(obj: QObject, name: str) -> bool:
    return name in get_classes(obj)


def add_class(obj: QObject, name: str) -> None:
    classes = get_classes(obj)
    if name not in classes:
        set_classes(obj, classes | {name})


def remove_class(obj: QObject, name: str) -> None:
    classes = get_classes(obj)
    if name in classes:
        set_classes(obj, classes - {name})


def is_invalid(obj: QObject) -> bool:
    return has_class(obj, INVALID_CLASS)


def mark_invalid(obj: QObject, invalid: bool = True) -> None:
    """Add or remove the invalid marker (used by validation collaborators)."""
    if invalid:
        add_class(obj, INVALID_CLASS)
    else:
        remove_class(obj, INVALID_CLASS)


def get_data_field(obj: QObject) -> str:
    value = obj.property(DATA_FIELD_PROPERTY)
    return str(value) if value else ""


def set_data_field(obj: QObject, name: str) -> None:
    obj.setProperty(DATA_FIELD_PROPERTY, name)


def get_prefix(obj: QObject) -> Optional[str]:
    value = obj.property(PREFIX_PROPERTY)
    return str(value) if value else None
