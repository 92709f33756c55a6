"""Base configuration class for form binding.

Provides hooks for applications to customize binding behavior.
"""

from dataclasses import dataclass, field
from datetime import tzinfo
from typing import FrozenSet, Optional


@dataclass
class FormBindConfig:
    """Base configuration for form binding behavior.

    Applications can subclass this to provide custom configuration.

    Attributes:
        prefix: Default name prefix identifying the fields of a form
        validate_hidden: Whether invisible fields count toward the invalid check
        timezone: Timezone used for date/time rendering and parsing (None = local)
        focus_invalid: Whether the first invalid field receives focus on get()
        validation_classes: Kind tags whose fields are revalidated by validate()
    """

    prefix: str = "data"
    validate_hidden: bool = True
    timezone: Optional[tzinfo] = None
    focus_invalid: bool = True
    validation_classes: FrozenSet[str] = field(
        default_factory=lambda: frozenset(
            {"required", "regexp", "date", "mandatory", "number", "validate"}
        )
    )


# Global config instance (set by application)
_form_config: Optional[FormBindConfig] = None


def set_form_config(config: Optional[FormBindConfig]) -> None:
    """Set the global form binding configuration.

    Args:
        config: FormBindConfig instance, or None to restore defaults
    """
    global _form_config
    _form_config = config


def get_form_config() -> FormBindConfig:
    """Get the current form binding configuration.

    Returns:
        Current FormBindConfig or default if not set
    """
    if _form_config is None:
        return FormBindConfig()
    return _form_config
