"""Unit tests for month arithmetic helpers"""

from datetime import date
from bizledger.utils.date_utils import add_months, month_index, month_key, subtract_months


def test_month_key_and_index():
    assert month_key(date(2024, 3, 31)) == "2024-03"
    assert month_index(date(2024, 1, 1)) == 0
    assert month_index(date(2024, 12, 25)) == 11


def test_add_months_rolls_over_years():
    """Result is always the first of the target month"""
    assert add_months(date(2024, 11, 30), 1) == date(2024, 12, 1)
    assert add_months(date(2024, 11, 30), 2) == date(2025, 1, 1)
    assert add_months(date(2024, 1, 31), -1) == date(2023, 12, 1)
    assert add_months(date(2024, 5, 15), 0) == date(2024, 5, 1)


def test_subtract_months_clamps_day():
    assert subtract_months(date(2024, 6, 15), 12) == date(2023, 6, 15)
    assert subtract_months(date(2024, 3, 31), 1) == date(2024, 2, 29)
    assert subtract_months(date(2023, 3, 31), 1) == date(2023, 2, 28)
    assert subtract_months(date(2024, 5, 31), 1) == date(2024, 4, 30)
