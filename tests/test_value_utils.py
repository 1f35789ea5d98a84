"""Tests for value normalization."""

from enum import Enum

import pytest

from pyqt_formrelation.core import normalize_value, values_equal


class Color(Enum):
    RED = "red"
    ONE = 1


@pytest.mark.parametrize("value, expected", [
    (None, ""),
    (True, "true"),
    (False, "false"),
    (1, "1"),
    (1.0, "1"),
    (1.5, "1.5"),
    ("  US ", "US"),
    (Color.RED, "red"),
    (Color.ONE, "1"),
])
def test_normalize_value(value, expected):
    assert normalize_value(value) == expected


def test_values_equal_is_symmetric_over_types():
    assert values_equal("1", 1)
    assert values_equal(1, "1")
    assert values_equal(Color.RED, "red")
    assert not values_equal("0", False)
