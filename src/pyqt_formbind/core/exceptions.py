"""Form binding exceptions."""


class FormBindError(Exception):
    """Base class for errors raised by the binding engine."""


class PathNavigationError(FormBindError, LookupError):
    """Raised when a dotted path cannot be navigated inside a model."""


class BindingError(FormBindError):
    """Raised when the engine is used with an invalid configuration."""
