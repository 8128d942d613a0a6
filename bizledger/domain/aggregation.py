"""Monthly bucketing of transactions and the summary statistics built on it"""

import math
from typing import Dict, List, Sequence

from bizledger.domain.classification import classify_transaction
from bizledger.domain.models import MonthlyAggregate, Transaction, TransactionType
from bizledger.utils.date_utils import month_index, month_key


def aggregate_by_month(transactions: List[Transaction]) -> List[MonthlyAggregate]:
    """
    Group transactions into calendar-month income/expense totals.

    One entry per distinct YYYY-MM present in the input, oldest first.
    """
    income: Dict[str, float] = {}
    expenses: Dict[str, float] = {}
    month_indexes: Dict[str, int] = {}

    for txn in transactions:
        key = month_key(txn.date)
        month_indexes[key] = month_index(txn.date)
        income.setdefault(key, 0.0)
        expenses.setdefault(key, 0.0)

        if classify_transaction(txn) is TransactionType.INCOME:
            income[key] += abs(txn.amount)
        else:
            expenses[key] += abs(txn.amount)

    return [
        MonthlyAggregate(
            month=key,
            month_index=month_indexes[key],
            income=income[key],
            expenses=expenses[key],
        )
        for key in sorted(month_indexes)
    ]


def calculate_average(values: Sequence[float]) -> float:
    """Arithmetic mean, 0 for an empty series"""
    if not values:
        return 0.0
    return sum(values) / len(values)


def coefficient_of_variation(values: Sequence[float]) -> float:
    """
    Population standard deviation divided by the mean.

    Returns 0 for an empty series or a zero mean.
    """
    if not values:
        return 0.0

    mean = calculate_average(values)
    if mean == 0:
        return 0.0

    variance = calculate_average([(v - mean) ** 2 for v in values])
    return math.sqrt(variance) / mean
