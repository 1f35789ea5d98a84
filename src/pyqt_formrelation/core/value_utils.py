"""
Value normalization shared by relation logic and field adapters.

Widgets report values in different shapes (str from line edits, int from
spin boxes, bool from check boxes, enum members from combo boxes) while
relation declarations are usually plain strings. Everything is compared
through one string-normalized form so that "1" matches 1 and "true" matches
True in exactly the same way everywhere.
"""

from enum import Enum
from typing import Any


def normalize_value(value: Any) -> str:
    """
    Normalize a field or declaration value to its comparison form.

    Rules:
    - None -> ""
    - bool -> "true" / "false"
    - Enum member -> normalized ``.value``
    - integral float -> integer text (1.0 -> "1")
    - anything else -> ``str(value).strip()``
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return normalize_value(value.value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def values_equal(left: Any, right: Any) -> bool:
    """Compare two values using string-normalized equality."""
    return normalize_value(left) == normalize_value(right)
