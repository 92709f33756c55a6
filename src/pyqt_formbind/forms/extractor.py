"""
View to model extraction.

Walks the input fields below a subtree, converts their text with the
TypeCoercer and writes the values into a model with the PathResolver.
"""

import copy
import logging
from typing import Any, Callable, Dict, Optional

from PyQt6.QtWidgets import QWidget

from pyqt_formbind.core.coercion import TypeCoercer
from pyqt_formbind.core.path_resolver import PathResolver
from pyqt_formbind.protocols import FieldRole
from .field_dispatcher import FieldDispatcher
from .field_scanner import FieldScanner, ScannedField
from .form_constants import CONSTANTS

logger = logging.getLogger(__name__)

ValidationHook = Callable[[QWidget], None]


def deep_merge(target: Dict[str, Any], source: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively copy ``source`` into ``target`` (dicts merge, everything else is replaced)."""
    for key, value in source.items():
        if isinstance(value, dict):
            existing = target.get(key)
            if not isinstance(existing, dict):
                existing = {}
                target[key] = existing
            deep_merge(existing, value)
        else:
            target[key] = copy.deepcopy(value)
    return target


def read_field_value(field: ScannedField) -> Any:
    """Read a field and coerce its presentation into a model value."""
    if field.role == FieldRole.CHECK_INPUT:
        return FieldDispatcher.read_checked(field.widget)
    if field.role == FieldRole.BLOB_INPUT:
        return FieldDispatcher.read_blob(field.widget)
    return TypeCoercer.from_field_text(FieldDispatcher.read_text(field.widget), field.kinds)


class Extractor:
    """
    Builds model objects from field values.

    Example:
        model = Extractor.extract(form, "data", {}, seed=saved)
    """

    @staticmethod
    def extract(root: QWidget, prefix: str, model: Optional[Dict[str, Any]] = None,
                seed: Any = None, on_validate: Optional[ValidationHook] = None,
                descend_collections: bool = True) -> Dict[str, Any]:
        """
        Extract the fields below ``root`` carrying ``prefix`` into ``model``.

        Args:
            root: Subtree to read (form root or collection line)
            prefix: Name prefix of the fields to read
            model: Target object, a new dict if None
            seed: Bound element of the subtree; merged into the model first,
                then overridden by the extracted fields
            on_validate: Called with each participating field before it is read
            descend_collections: Also read fields inside collection lines
        """
        if model is None:
            model = {}
        if isinstance(seed, dict) and seed:
            deep_merge(model, seed)

        for field in FieldScanner.scan(root, prefix, descend_collections=descend_collections):
            if field.is_transient:
                continue
            if on_validate is not None:
                on_validate(field.widget)
            value = read_field_value(field)
            PathResolver.set(model, field.path, value)

        return model
