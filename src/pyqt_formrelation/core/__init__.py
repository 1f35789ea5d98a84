"""
Core utilities.

Pure Python helpers with no Qt dependency.
"""

from .value_utils import normalize_value, values_equal

__all__ = [
    "normalize_value",
    "values_equal",
]
