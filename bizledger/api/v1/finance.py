"""/v1/finance - metrics, category breakdown, forecasting and forecast adjustment"""

import time
import logging
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request

from bizledger.api.dependencies import get_request_id, get_settings, get_today
from bizledger.api.v1.schemas import (
    AdjustForecastRequest,
    AdjustForecastResponse,
    CacheInvalidationResponse,
    CategoryRequest,
    CategoryResponse,
    CategoryTotalSchema,
    ForecastRequest,
    ForecastSchema,
    MetricsRequest,
    MetricsResponse,
)
from bizledger.config import Settings
from bizledger.domain.classification import filter_by_date_range
from bizledger.domain.exceptions import InsufficientDataError, InvalidForecastRequestError
from bizledger.domain.forecasting import adjust_forecast, generate_forecast
from bizledger.domain.metrics import calculate_metrics, category_breakdown, render_financial_snapshot
from bizledger.domain.models import CashFlowForecast, DateRange, FinancialMetrics, Transaction
from bizledger.infrastructure.cache import cached, result_cache
from bizledger.infrastructure.observability.logging import log_forecast
from bizledger.infrastructure.observability.metrics import record_adjustment, record_forecast
from bizledger.utils.date_utils import subtract_months

router = APIRouter()


@cached("metrics")
def _cached_metrics(user_id: str, transactions: List[Transaction], period: DateRange) -> FinancialMetrics:
    return calculate_metrics(transactions, period)


@cached("forecast")
def _cached_forecast(user_id: str, transactions: List[Transaction], months: int, today: date) -> CashFlowForecast:
    return generate_forecast(transactions, months, today=today)


@router.post("/finance/metrics", response_model=MetricsResponse)
def get_metrics(body: MetricsRequest):
    """Profitability snapshot for the requested period"""
    period = DateRange(start_date=body.start_date, end_date=body.end_date)
    transactions = [t.to_domain() for t in body.transactions]

    metrics = _cached_metrics(body.user_id, transactions, period)
    return MetricsResponse.from_domain(metrics, render_financial_snapshot(metrics))


@router.post("/finance/categories", response_model=CategoryResponse)
def get_categories(body: CategoryRequest):
    """Category totals for income or expenses only"""
    period = DateRange(start_date=body.start_date, end_date=body.end_date)
    transactions = [t.to_domain() for t in body.transactions]

    categories = category_breakdown(transactions, body.type, period)
    return CategoryResponse(
        type=body.type,
        categories=[CategoryTotalSchema.from_domain(c) for c in categories],
    )


@router.post("/finance/forecast", response_model=ForecastSchema)
def create_forecast(
    body: ForecastRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
    today: date = Depends(get_today),
):
    """
    Cash-flow forecast for the next N months.

    Flow:
    1. Resolve the horizon (service default when omitted)
    2. Keep only the trailing lookback window of history
    3. Generate (or reuse a cached) forecast
    4. Record metrics and logs
    """
    start_time = time.time()
    request_id = get_request_id(request)
    months = body.months if body.months is not None else settings.forecast_default_months

    try:
        if not 1 <= months <= settings.forecast_max_months:
            raise InvalidForecastRequestError(
                f"months must be between 1 and {settings.forecast_max_months}, got {months}"
            )

        lookback = DateRange(
            start_date=subtract_months(today, settings.forecast_lookback_months),
            end_date=today,
        )
        history = filter_by_date_range([t.to_domain() for t in body.transactions], lookback)

        forecast = _cached_forecast(body.user_id, history, months, today)

    except InvalidForecastRequestError as e:
        logging.warning(f"Invalid forecast request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail=str(e))

    except InsufficientDataError as e:
        logging.warning(f"Insufficient data: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_forecast(forecast.confidence)
    log_forecast(request_id, body.user_id, months, forecast.confidence, duration_ms)

    return ForecastSchema.from_domain(forecast)


@router.post("/finance/forecast/adjust", response_model=AdjustForecastResponse)
def adjust(body: AdjustForecastRequest):
    """Revise the remaining projections once a forecasted period's actuals are known"""
    original = body.forecast.to_domain()
    adjusted = adjust_forecast(original, body.actual_income, body.actual_expenses, body.period_index)

    changed = adjusted is not original
    record_adjustment(changed)

    return AdjustForecastResponse(adjusted=changed, forecast=ForecastSchema.from_domain(adjusted))


@router.delete("/finance/cache/{user_id}", response_model=CacheInvalidationResponse)
def invalidate_cache(user_id: str):
    """Drop cached results for a user after their transactions change"""
    removed = result_cache.invalidate_user(user_id)
    return CacheInvalidationResponse(user_id=user_id, entries_removed=removed)
