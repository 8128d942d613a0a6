"""Pydantic schemas for API request/response validation"""

import datetime
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from bizledger.domain.models import (
    DEFAULT_CATEGORY,
    CashFlowForecast,
    CategoryTotal,
    FinancialMetrics,
    MonthlyProjection,
    SeasonalFactor,
    Transaction,
    TransactionType,
)


class TransactionSchema(BaseModel):
    """Decrypted transaction as supplied by the caller"""

    id: str = Field(..., min_length=1)
    date: datetime.date
    amount: float = Field(..., allow_inf_nan=False, description="Signed amount; sign is used when type is absent")
    type: Optional[TransactionType] = None
    category: str = DEFAULT_CATEGORY
    description: str = ""

    def to_domain(self) -> Transaction:
        return Transaction(
            id=self.id,
            date=self.date,
            amount=self.amount,
            type=self.type,
            category=self.category,
            description=self.description,
        )


class MetricsRequest(BaseModel):
    """Request body for POST /v1/finance/metrics"""

    user_id: str = Field(..., min_length=1, description="User identifier")
    start_date: date
    end_date: date
    transactions: List[TransactionSchema] = Field(default_factory=list)


class CategoryRequest(MetricsRequest):
    """Request body for POST /v1/finance/categories"""

    type: TransactionType


class CategoryTotalSchema(BaseModel):
    category: str
    total: float
    count: int

    @classmethod
    def from_domain(cls, item: CategoryTotal) -> "CategoryTotalSchema":
        return cls(category=item.category, total=item.total, count=item.count)


class MetricsResponse(BaseModel):
    """Response for POST /v1/finance/metrics"""

    total_income: float
    total_expenses: float
    net_profit: float
    profit_margin: float
    start_date: date
    end_date: date
    category_breakdown: List[CategoryTotalSchema]
    snapshot: str

    @classmethod
    def from_domain(cls, metrics: FinancialMetrics, snapshot: str) -> "MetricsResponse":
        return cls(
            total_income=metrics.total_income,
            total_expenses=metrics.total_expenses,
            net_profit=metrics.net_profit,
            profit_margin=metrics.profit_margin,
            start_date=metrics.period.start_date,
            end_date=metrics.period.end_date,
            category_breakdown=[CategoryTotalSchema.from_domain(c) for c in metrics.category_breakdown],
            snapshot=snapshot,
        )


class CategoryResponse(BaseModel):
    """Response for POST /v1/finance/categories"""

    type: TransactionType
    categories: List[CategoryTotalSchema]


class ForecastRequest(BaseModel):
    """Request body for POST /v1/finance/forecast"""

    user_id: str = Field(..., min_length=1, description="User identifier")
    months: Optional[int] = Field(None, description="Horizon in months; service default when omitted")
    transactions: List[TransactionSchema] = Field(default_factory=list)


class ProjectionSchema(BaseModel):
    month: str = Field(..., pattern=r"^\d{4}-\d{2}$")
    projected_income: float = Field(..., allow_inf_nan=False)
    projected_expenses: float = Field(..., allow_inf_nan=False)
    projected_net_cash_flow: float = Field(..., allow_inf_nan=False)


class SeasonalFactorSchema(BaseModel):
    month_index: int = Field(..., ge=0, le=11)
    income_factor: float = Field(..., allow_inf_nan=False)
    expense_factor: float = Field(..., allow_inf_nan=False)


class ForecastSchema(BaseModel):
    """Wire form of a cash-flow forecast (response, and input for adjustment)"""

    projections: List[ProjectionSchema]
    confidence: float = Field(..., ge=0.0, le=1.0)
    seasonal_factors: List[SeasonalFactorSchema] = Field(default_factory=list)
    assumptions: List[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, forecast: CashFlowForecast) -> "ForecastSchema":
        return cls(
            projections=[ProjectionSchema(**vars(p)) for p in forecast.projections],
            confidence=forecast.confidence,
            seasonal_factors=[SeasonalFactorSchema(**vars(f)) for f in forecast.seasonal_factors],
            assumptions=list(forecast.assumptions),
        )

    def to_domain(self) -> CashFlowForecast:
        # Net cash flow is re-derived so the income/expense identity holds
        return CashFlowForecast(
            projections=tuple(
                MonthlyProjection.build(p.month, p.projected_income, p.projected_expenses)
                for p in self.projections
            ),
            confidence=self.confidence,
            seasonal_factors=tuple(SeasonalFactor(**f.model_dump()) for f in self.seasonal_factors),
            assumptions=tuple(self.assumptions),
        )


class AdjustForecastRequest(BaseModel):
    """Request body for POST /v1/finance/forecast/adjust"""

    forecast: ForecastSchema
    actual_income: float = Field(..., allow_inf_nan=False)
    actual_expenses: float = Field(..., allow_inf_nan=False)
    period_index: int = Field(..., description="Index of the elapsed projection")


class AdjustForecastResponse(BaseModel):
    adjusted: bool
    forecast: ForecastSchema


class CacheInvalidationResponse(BaseModel):
    user_id: str
    entries_removed: int
