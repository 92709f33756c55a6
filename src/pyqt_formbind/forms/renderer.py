"""
Model to view rendering.

Mirrors the extraction traversal but writes formatted model values into the
fields. Rendering does not skip transient fields.
"""

import logging
from typing import Any, Optional

from PyQt6.QtWidgets import QWidget

from pyqt_formbind.core.coercion import TypeCoercer
from pyqt_formbind.core.path_resolver import PathResolver
from pyqt_formbind.protocols import FieldRole
from pyqt_formbind.services.signal_service import SignalService
from .field_dispatcher import FieldDispatcher
from .field_scanner import FieldScanner, ScannedField

logger = logging.getLogger(__name__)


class Renderer:
    """
    Writes model values into fields.

    Example:
        Renderer.fill_data(form, {"name": "Ann"}, "data")
        Renderer.clear_fields(form, "data")
    """

    @staticmethod
    def fill_data(parent: QWidget, data: Any, prefix: Optional[str], inputs: bool = True) -> None:
        """
        Render ``data`` into every field below ``parent`` carrying ``prefix``.

        With ``inputs`` False only display labels are rendered.
        """
        for field in FieldScanner.scan(parent, prefix, inputs=inputs, displays=True):
            with SignalService.block_signals(field.widget):
                Renderer.render_field(field, data)

    @staticmethod
    def render_field(field: ScannedField, data: Any) -> None:
        role = field.role
        if role == FieldRole.BLOB_INPUT:
            # payloads cannot be prefilled
            return

        value = PathResolver.get(data, field.path)

        if role == FieldRole.DISPLAY_LABEL:
            FieldDispatcher.render_display(
                field.widget, TypeCoercer.to_display_text(value, field.kinds)
            )
        elif role == FieldRole.CHECK_INPUT:
            FieldDispatcher.write_checked(field.widget, TypeCoercer.is_checked(value))
        elif role == FieldRole.CHOICE_INPUT:
            Renderer._select(field, value)
        elif role == FieldRole.MULTILINE_INPUT:
            FieldDispatcher.write_text(field.widget, TypeCoercer.to_text(value))
        else:
            FieldDispatcher.write_text(field.widget, TypeCoercer.to_field_text(value, field.kinds))

    @staticmethod
    def _select(field: ScannedField, value: Any) -> None:
        selected = FieldDispatcher.select_option(field.widget, TypeCoercer.to_text(value))
        if isinstance(value, dict) and value.get("id") is not None:
            selected = FieldDispatcher.select_option(
                field.widget, TypeCoercer.to_text(value["id"])
            ) or selected
        if not selected:
            logger.debug(f"No option of '{field.name}' matches {value!r}")

    @staticmethod
    def clear_fields(parent: QWidget, prefix: Optional[str]) -> None:
        """Empty every input field below ``parent`` carrying ``prefix``."""
        for field in FieldScanner.scan(parent, prefix):
            SignalService.with_signals_blocked(field.widget, lambda f=field: Renderer._clear_field(f))

    @staticmethod
    def _clear_field(field: ScannedField) -> None:
        role = field.role
        if role == FieldRole.CHECK_INPUT:
            FieldDispatcher.write_checked(field.widget, False)
        elif role == FieldRole.CHOICE_INPUT:
            FieldDispatcher.clear_selection(field.widget)
        elif role == FieldRole.BLOB_INPUT:
            FieldDispatcher.discard_blob(field.widget)
        else:
            FieldDispatcher.write_text(field.widget, "")
