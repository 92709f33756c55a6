"""
Conversion between field text and typed model values.

Kind tags decide the conversion. Extraction never raises: text that is not a
number in a numeric field becomes 0, empty numeric text becomes None.
"""

import json
import logging
import math
import re
from datetime import datetime
from typing import AbstractSet, Any, Optional, Union

from pyqt_formbind.protocols.form_config import get_form_config
from .formatters import DATE_FORMAT, DATETIME_FORMAT, Format

logger = logging.getLogger(__name__)

Number = Union[int, float]

# Kind tags
NUMBER = "number"
CURRENCY = "currency"
NULLABLE = "emptynull"
BLOB = "blob"
TRANSIENT = "transient"
DATE = "date"
DATE_TIME = "dateTime"
DATE_FILTER = "dateFilter"
DATE_TIME_FILTER = "dateTimeFilter"

NUMERIC_KINDS = frozenset({NUMBER, CURRENCY})
EMPTY_AS_NULL_KINDS = frozenset({NUMBER, DATE_FILTER, DATE_TIME_FILTER, DATE, DATE_TIME})

_NUMBER_LITERAL = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


class TypeCoercer:
    """
    Static conversions used by extraction, rendering and diffing.

    Example:
        TypeCoercer.parse_number("1.234,50")                 # 1234.5
        TypeCoercer.from_field_text("", {"number"})          # None
        TypeCoercer.from_field_text("abc", {"currency"})     # 0
        TypeCoercer.to_field_text(1234.5, {"currency"})      # "1.234,50"
    """

    @staticmethod
    def parse_number(text: Any) -> Optional[Number]:
        """
        Parse localized numeric text.

        If the text contains "," or more than two characters follow the last
        ".", "." is read as thousands separator and "," as decimal separator.
        Returns None for empty input and NaN for non-numeric text.
        """
        if not text:
            return None
        if not isinstance(text, str):
            text = str(text)
        text = text.strip()
        if not text:
            return 0

        last_dot = text.rfind(".")
        if "," in text or (last_dot != -1 and len(text) - last_dot > 3):
            text = text.replace(".", "").replace(",", ".", 1)

        if not _NUMBER_LITERAL.match(text):
            return math.nan
        value = float(text)
        if value.is_integer() and not math.isinf(value):
            return int(value)
        return value

    @staticmethod
    def parse_date(text: str, kinds: AbstractSet[str]) -> Any:
        """Parse dd.MM.yyyy (or dd.MM.yyyy hh:mm) into a millisecond timestamp."""
        pattern = DATETIME_FORMAT if DATE_TIME in kinds else DATE_FORMAT
        try:
            moment = datetime.strptime(text.strip(), pattern)
        except ValueError:
            logger.debug(f"Keeping unparseable date text {text!r}")
            return text
        tz = get_form_config().timezone
        if tz is not None:
            moment = moment.replace(tzinfo=tz)
        return int(round(moment.timestamp() * 1000))

    @staticmethod
    def from_field_text(text: Optional[str], kinds: AbstractSet[str]) -> Any:
        """Convert the text of an input field into a model value."""
        value: Any = text
        if NULLABLE in kinds:
            if text is None or text.strip() == "":
                value = None
        elif text == "" and kinds & EMPTY_AS_NULL_KINDS:
            value = None

        if kinds & NUMERIC_KINDS:
            value = TypeCoercer.parse_number(value)
            if isinstance(value, float) and math.isnan(value):
                value = 0
        elif value and kinds & {DATE, DATE_TIME}:
            value = TypeCoercer.parse_date(value, kinds)
        return value

    @staticmethod
    def to_text(value: Any) -> str:
        """Plain text conversion of a model value."""
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, (dict, list)):
            return json.dumps(value)
        return str(value)

    @staticmethod
    def to_field_text(value: Any, kinds: AbstractSet[str]) -> str:
        """Convert a model value into the text of an input field."""
        if not value:
            return ""
        if DATE_TIME in kinds:
            return Format.date_time(value)
        if DATE in kinds:
            return Format.date(value)
        if kinds & NUMERIC_KINDS:
            return TypeCoercer.to_text(Format.decimal(value))
        return TypeCoercer.to_text(value)

    @staticmethod
    def to_display_text(value: Any, kinds: AbstractSet[str]) -> str:
        """Convert a model value into the text of a display label."""
        if not value:
            return ""
        if DATE_TIME in kinds:
            return f"{Format.date(value)} {Format.time(value)}"
        if DATE in kinds:
            return Format.date(value)
        if CURRENCY in kinds:
            return TypeCoercer.to_text(Format.currency(value))
        if NUMBER in kinds:
            return TypeCoercer.to_text(Format.decimal(value))
        return TypeCoercer.to_text(value)

    @staticmethod
    def is_checked(value: Any) -> bool:
        return value is True or value == "true"
