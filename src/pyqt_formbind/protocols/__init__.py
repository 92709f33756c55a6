"""
Field protocol definitions and adapters.

ABC-based field contracts that eliminate duck typing in favor of
explicit, fail-loud inheritance-based architecture.
"""

from .field_protocols import (
    FieldRole,
    INPUT_ROLES,
    BoundField,
    TextGettable,
    TextSettable,
    Checkable,
    OptionSelectable,
    DisplayRenderable,
    BlobHolder,
    EditLockable,
)
from .field_adapters import (
    PyQtWidgetMeta,
    FieldLineEdit,
    FieldPlainTextEdit,
    FieldCheckBox,
    FieldComboBox,
    BlobField,
    FieldLabel,
    LinkLabel,
    ImageLabel,
)
from .field_markers import (
    get_classes,
    set_classes,
    has_class,
    add_class,
    remove_class,
    is_invalid,
    mark_invalid,
    get_data_field,
    set_data_field,
    get_prefix,
)
from .form_config import FormBindConfig, set_form_config, get_form_config

__all__ = [
    "FieldRole",
    "INPUT_ROLES",
    "BoundField",
    "TextGettable",
    "TextSettable",
    "Checkable",
    "OptionSelectable",
    "DisplayRenderable",
    "BlobHolder",
    "EditLockable",
    "PyQtWidgetMeta",
    "FieldLineEdit",
    "FieldPlainTextEdit",
    "FieldCheckBox",
    "FieldComboBox",
    "BlobField",
    "FieldLabel",
    "LinkLabel",
    "ImageLabel",
    "get_classes",
    "set_classes",
    "has_class",
    "add_class",
    "remove_class",
    "is_invalid",
    "mark_invalid",
    "get_data_field",
    "set_data_field",
    "get_prefix",
    "FormBindConfig",
    "set_form_config",
    "get_form_config",
]
