"""Profitability metrics and the text snapshot rendered from them"""

from typing import Dict, Iterable, List, Optional

from bizledger.domain.classification import classify_transaction, filter_by_date_range
from bizledger.domain.models import (
    DEFAULT_CATEGORY,
    CategoryTotal,
    DateRange,
    FinancialMetrics,
    Transaction,
    TransactionType,
)


def _summarize_categories(transactions: Iterable[Transaction]) -> List[CategoryTotal]:
    """Sum absolute amounts per category, largest total first"""
    totals: Dict[str, float] = {}
    counts: Dict[str, int] = {}

    for txn in transactions:
        category = txn.category or DEFAULT_CATEGORY
        totals[category] = totals.get(category, 0.0) + abs(txn.amount)
        counts[category] = counts.get(category, 0) + 1

    # sorted() is stable: equal totals keep first-seen order
    breakdown = [CategoryTotal(category=c, total=totals[c], count=counts[c]) for c in totals]
    return sorted(breakdown, key=lambda item: item.total, reverse=True)


def calculate_metrics(transactions: List[Transaction], period: DateRange) -> FinancialMetrics:
    """
    Compute income, expenses, net profit and margin for a period.

    Only transactions dated inside the inclusive period are counted, so an
    inverted period simply yields all-zero metrics. Amounts are taken by
    absolute value once the income/expense type is resolved.

    Profit margin is a percentage of income and is 0 when there is no income.
    """
    in_period = filter_by_date_range(transactions, period)

    total_income = 0.0
    total_expenses = 0.0
    for txn in in_period:
        if classify_transaction(txn) is TransactionType.INCOME:
            total_income += abs(txn.amount)
        else:
            total_expenses += abs(txn.amount)

    net_profit = total_income - total_expenses
    profit_margin = (net_profit / total_income) * 100 if total_income > 0 else 0.0

    return FinancialMetrics(
        total_income=total_income,
        total_expenses=total_expenses,
        net_profit=net_profit,
        profit_margin=profit_margin,
        period=period,
        category_breakdown=tuple(_summarize_categories(in_period)),
    )


def category_breakdown(
    transactions: List[Transaction],
    txn_type: TransactionType,
    period: Optional[DateRange] = None,
) -> List[CategoryTotal]:
    """Category totals restricted to one transaction type (and optionally a period)"""
    if period is not None:
        transactions = filter_by_date_range(transactions, period)
    matching = [t for t in transactions if classify_transaction(t) is txn_type]
    return _summarize_categories(matching)


def render_financial_snapshot(metrics: FinancialMetrics) -> str:
    """Render metrics as the plain-text report shown to users"""
    lines = [
        "Financial Snapshot",
        "==================",
        "",
        f"Income: ${metrics.total_income:.2f}",
        f"Expenses: ${metrics.total_expenses:.2f}",
        f"Net Profit: ${metrics.net_profit:.2f}",
        f"Profit Margin: {metrics.profit_margin:.2f}%",
        "",
    ]

    if metrics.category_breakdown:
        lines.append("Category Breakdown:")
        for cat in metrics.category_breakdown:
            lines.append(f"  {cat.category}: ${cat.total:.2f} ({cat.count} transactions)")

    return "\n".join(lines)
