"""
Field discovery under a widget subtree.

Fields are found afresh on every traversal; nothing is cached between passes.
Traversal is pre-order over the Qt child tree, so fields come out in the
order they were laid out.
"""

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterator, List, Optional

from PyQt6.QtWidgets import QWidget

from pyqt_formbind.core.path_resolver import strip_prefix
from pyqt_formbind.protocols import BoundField, FieldRole, INPUT_ROLES
from pyqt_formbind.protocols.field_markers import has_class
from .form_constants import CONSTANTS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScannedField:
    """A bound field as seen by one traversal."""
    widget: QWidget
    name: str                 # full name, prefix included
    path: str                 # name with the prefix stripped
    kinds: FrozenSet[str]
    role: FieldRole

    @property
    def is_input(self) -> bool:
        return self.role in INPUT_ROLES

    @property
    def is_transient(self) -> bool:
        return CONSTANTS.TRANSIENT_CLASS in self.kinds


def iter_widgets(root: QWidget, include_root: bool = True,
                 descend_collections: bool = True) -> Iterator[QWidget]:
    """Pre-order walk of the widget tree below ``root``."""
    if include_root:
        yield root
    for child in root.children():
        if not isinstance(child, QWidget):
            continue
        if not descend_collections and has_class(child, CONSTANTS.COLLECTION_CLASS):
            continue
        yield from iter_widgets(child, True, descend_collections)


class FieldScanner:
    """
    Enumerates bound fields under a subtree.

    Example:
        for field in FieldScanner.scan(form, prefix="data"):
            print(field.path, field.role, field.kinds)
    """

    @staticmethod
    def scan(root: QWidget, prefix: Optional[str] = None, inputs: bool = True,
             displays: bool = False, descend_collections: bool = True) -> Iterator[ScannedField]:
        """
        Yield the bound fields under ``root`` whose name carries ``prefix``.

        Args:
            root: Subtree root (included if it is a field itself)
            prefix: Required name prefix; None or "" matches every named field
            inputs: Include input roles
            displays: Include display labels
            descend_collections: Also walk into collection containers
        """
        for widget in iter_widgets(root, True, descend_collections):
            if not isinstance(widget, BoundField):
                continue
            role = widget.field_role()
            if role == FieldRole.DISPLAY_LABEL:
                if not displays:
                    continue
            elif not inputs:
                continue

            name = widget.field_name()
            path = strip_prefix(name, prefix or "")
            if not path:
                continue
            yield ScannedField(widget, name, path, widget.field_kinds(), role)

    @staticmethod
    def invalid_widgets(root: QWidget, descend_collections: bool = True,
                        visible_only: bool = False) -> List[QWidget]:
        """Return widgets under ``root`` carrying the invalid marker."""
        found = []
        for widget in iter_widgets(root, True, descend_collections):
            if not has_class(widget, CONSTANTS.INVALID_CLASS):
                continue
            if visible_only and widget is not root and not widget.isVisibleTo(root):
                continue
            found.append(widget)
        return found
