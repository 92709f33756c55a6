"""
Read-only comparison of live fields against a reference model.

Uses the extraction traversal and coercion but compares in place instead of
writing. Stops at the first difference.
"""

import logging
from typing import Any

from PyQt6.QtWidgets import QWidget

from pyqt_formbind.core.path_resolver import MAX_PATH_DEPTH, split_path
from .extractor import read_field_value
from .field_scanner import FieldScanner

logger = logging.getLogger(__name__)

MISSING = object()


def same_value(left: Any, right: Any) -> bool:
    """
    Strict equality between a field value and a model value.

    Booleans only equal booleans, numbers compare by value, everything else
    needs the same type and an equal value. A missing value equals nothing.
    """
    if left is MISSING or right is MISSING:
        return False
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return left == right
    return type(left) is type(right) and left == right


def _lookup(container: Any, segment: str) -> Any:
    if isinstance(container, dict):
        return container.get(segment, MISSING)
    if isinstance(container, list) and segment.isdigit() and int(segment) < len(container):
        return container[int(segment)]
    return MISSING


def reference_value(reference: Any, path: str) -> Any:
    """Navigate ``path`` in the reference; any missing step yields the missing marker."""
    current = reference
    for segment in split_path(path):
        current = _lookup(current, segment)
        if current is MISSING:
            return MISSING
    return current


class DiffEngine:
    """
    Compares a subtree's fields with a reference model.

    Example:
        if DiffEngine.differs(form, "data", saved_model):
            ask_to_save()
    """

    @staticmethod
    def differs(root: QWidget, prefix: str, reference: Any,
                descend_collections: bool = True) -> bool:
        """Return True as soon as one field value differs from ``reference``."""
        for field in FieldScanner.scan(root, prefix, descend_collections=descend_collections):
            if field.is_transient:
                continue
            if len(split_path(field.path)) > MAX_PATH_DEPTH:
                logger.debug(f"Not comparing '{field.name}': path too deep")
                continue
            value = read_field_value(field)
            expected = reference_value(reference, field.path)
            if not same_value(value, expected):
                logger.debug(f"'{field.name}' differs: {value!r} != {expected!r}")
                return True
        return False
