"""Income/expense classification and date filtering of transactions"""

from dataclasses import replace
from typing import Iterable, List

from bizledger.domain.models import DateRange, Transaction, TransactionType


def classify_transaction(transaction: Transaction) -> TransactionType:
    """
    Resolve a transaction to income or expense.

    An explicit type on the record always wins. Otherwise the sign decides:
    positive amounts are income, zero and negative amounts are expenses.
    """
    if transaction.type is not None:
        return TransactionType(transaction.type)
    return TransactionType.INCOME if transaction.amount > 0 else TransactionType.EXPENSE


def classify_transactions(transactions: Iterable[Transaction]) -> List[Transaction]:
    """Return copies of the transactions with their type filled in"""
    return [replace(t, type=classify_transaction(t)) for t in transactions]


def filter_by_date_range(transactions: Iterable[Transaction], period: DateRange) -> List[Transaction]:
    """Keep transactions dated inside the inclusive period (empty when start > end)"""
    return [t for t in transactions if period.contains(t.date)]
