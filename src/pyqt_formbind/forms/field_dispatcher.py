"""
Field dispatcher with fail-loud ABC checking.

Replaces duck typing (hasattr checks) with explicit isinstance checks against
the field ABCs. All methods fail loud if a widget does not implement the ABC
the operation needs.
"""

from typing import Any

from pyqt_formbind.protocols import (
    TextGettable, TextSettable, Checkable, OptionSelectable,
    DisplayRenderable, BlobHolder, EditLockable,
)


def _require(widget: Any, abc_type: type, method: str) -> None:
    if not isinstance(widget, abc_type):
        raise TypeError(
            f"Widget {type(widget).__name__} does not implement {abc_type.__name__} ABC. "
            f"Add {abc_type.__name__} to widget's base classes and implement {method}() method."
        )


class FieldDispatcher:
    """
    ABC-based field dispatch - NO DUCK TYPING.

    Example:
        text = FieldDispatcher.read_text(widget)  # Raises TypeError if not TextGettable
    """

    @staticmethod
    def read_text(widget: Any) -> str:
        _require(widget, TextGettable, "read_text")
        return widget.read_text()

    @staticmethod
    def write_text(widget: Any, text: str) -> None:
        _require(widget, TextSettable, "write_text")
        widget.write_text(text)

    @staticmethod
    def read_checked(widget: Any) -> bool:
        _require(widget, Checkable, "read_checked")
        return widget.read_checked()

    @staticmethod
    def write_checked(widget: Any, checked: bool) -> None:
        _require(widget, Checkable, "write_checked")
        widget.write_checked(checked)

    @staticmethod
    def select_option(widget: Any, value: str) -> bool:
        _require(widget, OptionSelectable, "select_option")
        return widget.select_option(value)

    @staticmethod
    def clear_selection(widget: Any) -> None:
        _require(widget, OptionSelectable, "clear_selection")
        widget.clear_selection()

    @staticmethod
    def render_display(widget: Any, text: str) -> None:
        _require(widget, DisplayRenderable, "render_display")
        widget.render_display(text)

    @staticmethod
    def read_blob(widget: Any) -> Any:
        _require(widget, BlobHolder, "read_blob")
        return widget.read_blob()

    @staticmethod
    def discard_blob(widget: Any) -> None:
        _require(widget, BlobHolder, "discard_blob")
        widget.discard_blob()

    @staticmethod
    def set_edit_locked(widget: Any, locked: bool) -> None:
        _require(widget, EditLockable, "set_edit_locked")
        widget.set_edit_locked(locked)
