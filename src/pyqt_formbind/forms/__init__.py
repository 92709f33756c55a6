"""
Form binding and collection management.

FormBinder and its supporting engine: field scanning, extraction,
rendering, comparison and collection templates.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .form_binder import FormBinder
    from .binder_registry import BinderRegistry
    from .collection_manager import CollectionManager, CollectionBinding, CollectionLine
    from .template_blueprint import WidgetBlueprint, LayoutBlueprint
    from .field_scanner import FieldScanner, ScannedField
    from .extractor import Extractor
    from .renderer import Renderer
    from .diff_engine import DiffEngine
    from .field_dispatcher import FieldDispatcher
    from .form_constants import FormBindConstants, CONSTANTS

_EXPORTS = {
    "FormBinder": ("pyqt_formbind.forms.form_binder", "FormBinder"),
    "BinderRegistry": ("pyqt_formbind.forms.binder_registry", "BinderRegistry"),
    "CollectionManager": ("pyqt_formbind.forms.collection_manager", "CollectionManager"),
    "CollectionBinding": ("pyqt_formbind.forms.collection_manager", "CollectionBinding"),
    "CollectionLine": ("pyqt_formbind.forms.collection_manager", "CollectionLine"),
    "WidgetBlueprint": ("pyqt_formbind.forms.template_blueprint", "WidgetBlueprint"),
    "LayoutBlueprint": ("pyqt_formbind.forms.template_blueprint", "LayoutBlueprint"),
    "FieldScanner": ("pyqt_formbind.forms.field_scanner", "FieldScanner"),
    "ScannedField": ("pyqt_formbind.forms.field_scanner", "ScannedField"),
    "Extractor": ("pyqt_formbind.forms.extractor", "Extractor"),
    "Renderer": ("pyqt_formbind.forms.renderer", "Renderer"),
    "DiffEngine": ("pyqt_formbind.forms.diff_engine", "DiffEngine"),
    "FieldDispatcher": ("pyqt_formbind.forms.field_dispatcher", "FieldDispatcher"),
    "FormBindConstants": ("pyqt_formbind.forms.form_constants", "FormBindConstants"),
    "CONSTANTS": ("pyqt_formbind.forms.form_constants", "CONSTANTS"),
}


def __getattr__(name: str):
    if name in _EXPORTS:
        module_name, attr = _EXPORTS[name]
        module = importlib.import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = list(_EXPORTS.keys())
