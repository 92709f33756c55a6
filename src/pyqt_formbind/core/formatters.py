"""
Value formatters for the render direction.

One fixed convention: "." groups thousands, "," separates decimals,
dates are dd.MM.yyyy and times hh:mm (24h).
"""

import logging
import math
from datetime import date, datetime
from typing import Any, Optional

from pyqt_formbind.protocols.form_config import get_form_config

logger = logging.getLogger(__name__)

DATE_FORMAT = "%d.%m.%Y"
TIME_FORMAT = "%H:%M"
DATETIME_FORMAT = f"{DATE_FORMAT} {TIME_FORMAT}"

DECIMAL_SEPARATOR = ","
THOUSANDS_SEPARATOR = "."


def _as_number(value: Any) -> Optional[float]:
    """Return value as float, or None if it is not numeric."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return None if math.isnan(value) else float(value)
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return None if math.isnan(number) else number
    return None


def to_datetime(value: Any, tz=None) -> Optional[datetime]:
    """
    Convert a millisecond timestamp (or date/datetime) to a datetime.

    Uses the configured timezone when ``tz`` is not given.
    """
    if tz is None:
        tz = get_form_config().timezone
    if isinstance(value, datetime):
        return value.astimezone(tz) if tz is not None and value.tzinfo else value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if value is None or value == "" or isinstance(value, bool):
        return None
    millis = _as_number(value)
    if millis is None or math.isinf(millis):
        return None
    try:
        return datetime.fromtimestamp(millis / 1000.0, tz)
    except (OverflowError, OSError, ValueError):
        logger.debug(f"Timestamp out of range: {value!r}")
        return None


class Format:
    """
    Formatters for presenting model values in fields.

    Example:
        Format.decimal(-1234.5)   # "-1.234,50"
        Format.decimal(0)         # 0 (falsy values pass through)
        Format.human_time(61000)  # "1m 1s"
    """

    @staticmethod
    def decimal(num: Any) -> Any:
        """Format a number with "." thousands grouping and 2 decimals after ","."""
        if num == "" or not num:
            return num
        value = _as_number(num)
        if value is None or math.isinf(value):
            return num

        grouped = f"{abs(value):,.2f}"
        integer, fraction = grouped.split(".")
        integer = integer.replace(",", THOUSANDS_SEPARATOR)
        sign = "-" if value < 0 else ""
        return f"{sign}{integer}{DECIMAL_SEPARATOR}{fraction}"

    @staticmethod
    def currency(num: Any) -> Any:
        return Format.decimal(num)

    @staticmethod
    def date(value: Any) -> str:
        """Format a millisecond timestamp as dd.MM.yyyy."""
        moment = to_datetime(value)
        if moment is None:
            return ""
        return f"{moment.day:02d}.{moment.month:02d}.{moment.year:04d}"

    @staticmethod
    def time(value: Any) -> str:
        """Format a millisecond timestamp as hh:mm."""
        moment = to_datetime(value)
        if moment is None:
            return ""
        return f"{moment.hour:02d}:{moment.minute:02d}"

    @staticmethod
    def date_time(value: Any) -> str:
        if to_datetime(value) is None:
            return ""
        return f"{Format.date(value)} {Format.time(value)}"

    @staticmethod
    def human_time(value: Any) -> Any:
        """
        Format a millisecond duration for humans, largest unit first.

        Hours suppress seconds and milliseconds, minutes suppress milliseconds.
        Non-numeric input: None/empty gives "-", anything else is returned as is.
        """
        millis = _as_number(value) if not isinstance(value, bool) else None
        if millis is None:
            if value is None or (hasattr(value, "__len__") and len(value) == 0):
                return "-"
            return value

        hours = math.floor(millis / 3600000)
        millis -= hours * 3600000
        minutes = math.floor(millis / 60000)
        millis -= minutes * 60000
        seconds = math.floor(millis / 1000)
        millis -= seconds * 1000

        parts = []
        if hours > 0:
            parts.append(f"{hours}h")
            seconds = 0
            millis = 0
        if minutes > 0:
            parts.append(f"{minutes}m")
            millis = 0
        if seconds > 0:
            parts.append(f"{seconds}s")
            millis = 0
        if millis > 0:
            parts.append(f"{millis:g}ms")
        return " ".join(parts)
