"""
Signal Service.

Context managers for blocking widget signals while the binding engine writes
into fields, so programmatic fills do not look like user edits.
"""

from contextlib import contextmanager
from typing import Callable
import logging

from PyQt6.QtWidgets import QWidget

logger = logging.getLogger(__name__)


class SignalService:
    """
    Service for signal blocking.

    Examples:
        # Block signals (context manager):
        with SignalService.block_signals(line_edit):
            line_edit.setText("42")

        # Multiple widgets:
        with SignalService.block_signals(widget1, widget2):
            widget1.setText("a")
            widget2.setChecked(True)
    """

    @staticmethod
    @contextmanager
    def block_signals(*widgets: QWidget):
        """Context manager for blocking widget signals, restoring the previous state."""
        previous = []
        for widget in widgets:
            if widget is not None:
                previous.append((widget, widget.blockSignals(True)))

        try:
            yield
        finally:
            for widget, was_blocked in previous:
                widget.blockSignals(was_blocked)

    @staticmethod
    def with_signals_blocked(widget: QWidget, operation: Callable[[], None]) -> None:
        """Execute operation with widget signals blocked (lambda-based)."""
        with SignalService.block_signals(widget):
            operation()
