"""
Core binding utilities.

Dotted path access, text/value coercion, formatters and the emptiness
predicate. Qt enters only through the shared configuration that the
coercion and formatting helpers read from protocols.form_config.
"""

from .exceptions import FormBindError, PathNavigationError, BindingError
from .path_resolver import PathResolver, strip_prefix, split_path, MAX_PATH_DEPTH
from .coercion import TypeCoercer
from .formatters import Format
from .emptiness import is_empty

__all__ = [
    "FormBindError",
    "PathNavigationError",
    "BindingError",
    "PathResolver",
    "strip_prefix",
    "split_path",
    "MAX_PATH_DEPTH",
    "TypeCoercer",
    "Format",
    "is_empty",
]
