"""Unit tests for monthly aggregation and seasonal factor detection"""

import pytest
from datetime import date
from bizledger.domain.aggregation import aggregate_by_month, calculate_average, coefficient_of_variation
from bizledger.domain.models import MonthlyAggregate, Transaction, TransactionType
from bizledger.domain.seasonality import detect_seasonal_patterns, factor_for_month


def test_aggregate_by_month_buckets_and_orders():
    """One entry per year-month, oldest first, across years"""
    transactions = [
        Transaction(id="1", date=date(2024, 3, 9), amount=50.0),
        Transaction(id="2", date=date(2024, 1, 15), amount=100.0),
        Transaction(id="3", date=date(2024, 1, 20), amount=-40.0),
        Transaction(id="4", date=date(2023, 1, 2), amount=10.0),
    ]

    monthly = aggregate_by_month(transactions)

    assert [m.month for m in monthly] == ["2023-01", "2024-01", "2024-03"]
    assert [m.month_index for m in monthly] == [0, 0, 2]
    assert monthly[1].income == 100.0
    assert monthly[1].expenses == 40.0
    assert monthly[2].expenses == 0.0


def test_aggregate_by_month_respects_explicit_type():
    """Typed records are bucketed by their label, using the absolute amount"""
    transactions = [
        Transaction(id="1", date=date(2024, 5, 1), amount=75.0, type=TransactionType.EXPENSE),
        Transaction(id="2", date=date(2024, 5, 2), amount=-25.0, type=TransactionType.INCOME),
    ]

    (may,) = aggregate_by_month(transactions)

    assert may.income == 25.0
    assert may.expenses == 75.0


def test_aggregate_by_month_empty():
    assert aggregate_by_month([]) == []


def test_calculate_average():
    assert calculate_average([]) == 0
    assert calculate_average([2.0, 4.0, 9.0]) == 5.0


def test_coefficient_of_variation():
    """Population stdev over mean, guarded for empty and zero-mean series"""
    assert coefficient_of_variation([]) == 0
    assert coefficient_of_variation([0.0, 0.0]) == 0
    assert coefficient_of_variation([5.0, 5.0, 5.0]) == 0
    assert coefficient_of_variation([2.0, 4.0]) == pytest.approx(1 / 3)


def test_detect_seasonal_patterns_pools_calendar_months():
    """Same calendar month in different years is averaged before dividing by the overall mean"""
    monthly = [
        MonthlyAggregate(month="2023-01", month_index=0, income=100.0, expenses=50.0),
        MonthlyAggregate(month="2024-01", month_index=0, income=200.0, expenses=50.0),
        MonthlyAggregate(month="2024-06", month_index=5, income=300.0, expenses=80.0),
    ]

    factors = detect_seasonal_patterns(monthly)

    assert [f.month_index for f in factors] == [0, 5]
    january, june = factors
    assert january.income_factor == pytest.approx(0.75)  # 150 / 200
    assert june.income_factor == pytest.approx(1.5)  # 300 / 200
    assert january.expense_factor == pytest.approx(50 / 60)
    assert june.expense_factor == pytest.approx(80 / 60)


def test_detect_seasonal_patterns_omits_unobserved_months():
    """Months never seen get no factor rather than a default of 1"""
    monthly = [MonthlyAggregate(month="2024-02", month_index=1, income=10.0, expenses=5.0)]

    factors = detect_seasonal_patterns(monthly)

    assert len(factors) == 1
    assert factor_for_month(factors, 1) is not None
    assert factor_for_month(factors, 7) is None


def test_detect_seasonal_patterns_zero_mean_is_neutral():
    """With no income at all the income factor is 1, never NaN"""
    monthly = [
        MonthlyAggregate(month="2024-01", month_index=0, income=0.0, expenses=10.0),
        MonthlyAggregate(month="2024-02", month_index=1, income=0.0, expenses=30.0),
    ]

    factors = detect_seasonal_patterns(monthly)

    assert all(f.income_factor == 1.0 for f in factors)
    assert factors[0].expense_factor == pytest.approx(0.5)
    assert factors[1].expense_factor == pytest.approx(1.5)


def test_detect_seasonal_patterns_empty():
    assert detect_seasonal_patterns([]) == []
