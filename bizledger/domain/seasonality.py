"""Seasonal pattern detection over monthly history"""

from typing import Dict, List, Optional, Sequence

from bizledger.domain.aggregation import calculate_average
from bizledger.domain.models import MonthlyAggregate, SeasonalFactor


def detect_seasonal_patterns(monthly_data: Sequence[MonthlyAggregate]) -> List[SeasonalFactor]:
    """
    Derive per-calendar-month multipliers for income and expenses.

    Occurrences of the same calendar month across years are pooled, and each
    pool's mean is divided by the mean over every month of history. A factor
    is 1 when the overall mean is zero. Calendar months that never appear in
    the history get no entry at all; callers fall back to 1.0 themselves.

    Factors are returned ordered by month index.
    """
    incomes_by_month: Dict[int, List[float]] = {}
    expenses_by_month: Dict[int, List[float]] = {}

    for data in monthly_data:
        incomes_by_month.setdefault(data.month_index, []).append(data.income)
        expenses_by_month.setdefault(data.month_index, []).append(data.expenses)

    avg_income = calculate_average([m.income for m in monthly_data])
    avg_expenses = calculate_average([m.expenses for m in monthly_data])

    factors = []
    for index in sorted(incomes_by_month):
        month_income = calculate_average(incomes_by_month[index])
        month_expenses = calculate_average(expenses_by_month[index])

        factors.append(
            SeasonalFactor(
                month_index=index,
                income_factor=month_income / avg_income if avg_income > 0 else 1.0,
                expense_factor=month_expenses / avg_expenses if avg_expenses > 0 else 1.0,
            )
        )

    return factors


def factor_for_month(factors: Sequence[SeasonalFactor], month_index: int) -> Optional[SeasonalFactor]:
    """Look up the factor for a calendar month, None when it was never observed"""
    for factor in factors:
        if factor.month_index == month_index:
            return factor
    return None
