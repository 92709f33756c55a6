"""
Emptiness predicate used to prune collection lines.

A value is empty when it carries no meaningful content:
None/False, numbers 0 and -1, "" or a single space, and containers whose
elements are all empty (including empty containers).
"""

import math
from typing import Any


def is_empty(value: Any) -> bool:
    """Return True if ``value`` counts as empty."""
    if not value:
        return True

    if isinstance(value, (list, tuple)):
        return all(is_empty(element) for element in value)

    if isinstance(value, dict):
        return all(is_empty(element) for element in value.values())

    if isinstance(value, (int, float)):
        if isinstance(value, float) and math.isnan(value):
            return True
        return value == 0 or value == -1

    if isinstance(value, str):
        return value == "" or value == " "

    return False
