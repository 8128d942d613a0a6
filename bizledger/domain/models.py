"""Domain models - immutable dataclasses for transactions, metrics and forecasts"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional, Tuple


class TransactionType(str, Enum):
    """Resolved direction of a money movement"""

    INCOME = "income"
    EXPENSE = "expense"


DEFAULT_CATEGORY = "Uncategorized"


@dataclass(frozen=True)
class Transaction:
    """Ledger transaction supplied by the transaction store (already decrypted)"""

    id: str
    date: date
    amount: float  # signed: > 0 leans income, <= 0 leans expense
    type: Optional[TransactionType] = None
    category: str = DEFAULT_CATEGORY
    description: str = ""


@dataclass(frozen=True)
class DateRange:
    """Inclusive date window"""

    start_date: date
    end_date: date

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class CategoryTotal:
    category: str
    total: float
    count: int


@dataclass(frozen=True)
class FinancialMetrics:
    """Profitability snapshot for a period"""

    total_income: float
    total_expenses: float
    net_profit: float
    profit_margin: float
    period: DateRange
    category_breakdown: Tuple[CategoryTotal, ...] = ()


@dataclass(frozen=True)
class MonthlyAggregate:
    """Income and expense totals for one calendar month of history"""

    month: str  # YYYY-MM
    month_index: int  # 0 = January
    income: float
    expenses: float


@dataclass(frozen=True)
class SeasonalFactor:
    month_index: int
    income_factor: float
    expense_factor: float


@dataclass(frozen=True)
class MonthlyProjection:
    month: str  # YYYY-MM
    projected_income: float
    projected_expenses: float
    projected_net_cash_flow: float

    @classmethod
    def build(cls, month: str, income: float, expenses: float) -> "MonthlyProjection":
        """Net cash flow is always derived from the income/expense pair"""
        return cls(
            month=month,
            projected_income=income,
            projected_expenses=expenses,
            projected_net_cash_flow=income - expenses,
        )


@dataclass(frozen=True)
class CashFlowForecast:
    """Forward projection of monthly cash flow"""

    projections: Tuple[MonthlyProjection, ...]
    confidence: float
    seasonal_factors: Tuple[SeasonalFactor, ...] = ()
    assumptions: Tuple[str, ...] = field(default_factory=tuple)
