"""
Field ABC contracts for form binding.

Defines the explicit contracts a widget must implement to take part in
extraction, rendering and diffing. The engine checks these with isinstance
and fails loud on widgets that do not implement them.

Design Philosophy:
- Explicit inheritance over duck typing
- Fail-loud over fail-silent
- Multiple inheritance for composable capabilities
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, FrozenSet, Optional


class FieldRole(Enum):
    """How a bound field presents its value."""
    TEXT_INPUT = "text_input"
    CHOICE_INPUT = "choice_input"
    MULTILINE_INPUT = "multiline_input"
    CHECK_INPUT = "check_input"
    BLOB_INPUT = "blob_input"
    DISPLAY_LABEL = "display_label"


INPUT_ROLES = frozenset({
    FieldRole.TEXT_INPUT,
    FieldRole.CHOICE_INPUT,
    FieldRole.MULTILINE_INPUT,
    FieldRole.CHECK_INPUT,
    FieldRole.BLOB_INPUT,
})


class BoundField(ABC):
    """
    ABC for widgets bound to a model path.

    Implementations declare a ``_field_role`` class attribute.
    """

    _field_role: FieldRole

    @abstractmethod
    def field_name(self) -> str:
        """
        Get the dotted name path of this field (prefix included).

        Returns:
            The name, or "" if the field is unnamed.
        """
        pass

    @abstractmethod
    def field_kinds(self) -> FrozenSet[str]:
        """Get the kind tags of this field."""
        pass

    @classmethod
    def field_role(cls) -> FieldRole:
        return cls._field_role


class TextGettable(ABC):
    """ABC for fields whose current value can be read as text."""

    @abstractmethod
    def read_text(self) -> str:
        pass


class TextSettable(ABC):
    """ABC for fields that accept text."""

    @abstractmethod
    def write_text(self, text: str) -> None:
        pass


class Checkable(ABC):
    """ABC for fields presenting a boolean."""

    @abstractmethod
    def read_checked(self) -> bool:
        pass

    @abstractmethod
    def write_checked(self, checked: bool) -> None:
        pass


class OptionSelectable(ABC):
    """ABC for fields choosing one value out of a list of options."""

    @abstractmethod
    def select_option(self, value: str) -> bool:
        """
        Select the option whose value text equals ``value``.

        Returns:
            True if a matching option was selected.
        """
        pass

    @abstractmethod
    def clear_selection(self) -> None:
        pass


class DisplayRenderable(ABC):
    """
    ABC for read-only display fields.

    A display field decides where the rendered text goes: its text, a link
    target or an image source.
    """

    @abstractmethod
    def render_display(self, text: str) -> None:
        pass


class BlobHolder(ABC):
    """
    ABC for fields holding an opaque payload deposited by a file reader.

    The payload may arrive asynchronously; until then read_blob() is None.
    """

    @abstractmethod
    def read_blob(self) -> Any:
        pass

    @abstractmethod
    def deposit_blob(self, payload: Any, file_name: Optional[str] = None) -> None:
        pass

    @abstractmethod
    def discard_blob(self) -> None:
        pass


class EditLockable(ABC):
    """ABC for input fields that can be switched to read-only."""

    @abstractmethod
    def set_edit_locked(self, locked: bool) -> None:
        pass
