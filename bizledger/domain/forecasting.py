"""Cash-flow forecasting engine - seasonal projections and actuals-driven adjustment"""

import logging
from dataclasses import replace
from datetime import date
from typing import List, Optional, Sequence

from bizledger.domain.aggregation import aggregate_by_month, calculate_average, coefficient_of_variation
from bizledger.domain.exceptions import InsufficientDataError, InvalidForecastRequestError
from bizledger.domain.models import CashFlowForecast, MonthlyAggregate, MonthlyProjection, Transaction
from bizledger.domain.seasonality import detect_seasonal_patterns, factor_for_month
from bizledger.utils.date_utils import add_months, month_index, month_key

logger = logging.getLogger(__name__)

# Absolute monetary amount below which a value counts as zero
MEANINGFUL_THRESHOLD = 0.01

# Relative miss tolerated before future projections are rescaled
DEVIATION_THRESHOLD = 0.2

ADJUSTMENT_NOTE = "Adjusted based on actual results deviating by more than 20%"


def calculate_forecast_confidence(monthly_data: Sequence[MonthlyAggregate]) -> float:
    """
    Score how far a forecast can be trusted, from 0.5 to 0.9.

    Confidence bands:
    - < 3 months of history: 0.5
    - < 6 months of history: 0.7
    - otherwise by average coefficient of variation of income and expenses:
      < 0.3 -> 0.9, < 0.6 -> 0.8, < 1.0 -> 0.7, else 0.6
    """
    if len(monthly_data) < 3:
        return 0.5
    if len(monthly_data) < 6:
        return 0.7

    income_cv = coefficient_of_variation([m.income for m in monthly_data])
    expense_cv = coefficient_of_variation([m.expenses for m in monthly_data])
    avg_cv = (income_cv + expense_cv) / 2

    if avg_cv < 0.3:
        return 0.9
    elif avg_cv < 0.6:
        return 0.8
    elif avg_cv < 1.0:
        return 0.7
    else:
        return 0.6


def generate_forecast(
    transactions: List[Transaction],
    months: int = 3,
    today: Optional[date] = None,
) -> CashFlowForecast:
    """
    Project income and expenses for the next `months` calendar months.

    The baseline is the plain mean of monthly income and expenses over the
    whole history. Each projected month is scaled by its seasonal factor when
    that calendar month was observed; otherwise the baseline is used as is.
    Projections start with the month after `today`.

    Raises:
        InsufficientDataError: no transactions to learn from
        InvalidForecastRequestError: horizon below one month
    """
    if not transactions:
        raise InsufficientDataError(
            "Insufficient data: need at least some historical transactions for forecasting"
        )
    if months < 1:
        raise InvalidForecastRequestError(f"Forecast horizon must be at least 1 month, got {months}")

    if today is None:
        today = date.today()

    monthly_data = aggregate_by_month(transactions)
    seasonal_factors = detect_seasonal_patterns(monthly_data)

    avg_income = calculate_average([m.income for m in monthly_data])
    avg_expenses = calculate_average([m.expenses for m in monthly_data])

    projections = []
    for offset in range(1, months + 1):
        forecast_month = add_months(today, offset)
        factor = factor_for_month(seasonal_factors, month_index(forecast_month))

        income = avg_income * factor.income_factor if factor else avg_income
        expenses = avg_expenses * factor.expense_factor if factor else avg_expenses

        projections.append(MonthlyProjection.build(month_key(forecast_month), income, expenses))

    confidence = calculate_forecast_confidence(monthly_data)
    logger.debug(
        "Forecast generated",
        extra={"history_months": len(monthly_data), "horizon_months": months, "confidence": confidence},
    )

    return CashFlowForecast(
        projections=tuple(projections),
        confidence=confidence,
        seasonal_factors=tuple(seasonal_factors),
        assumptions=(
            "Based on historical transaction patterns",
            f"Using {len(monthly_data)} months of historical data",
            "Seasonal patterns incorporated where detected",
            "Assumes similar business conditions continue",
        ),
    )


def _deviation(projected: float, actual: float) -> float:
    """Relative miss; a negligible projection against a real actual counts as 100%"""
    if projected > MEANINGFUL_THRESHOLD:
        return abs(actual - projected) / projected
    if abs(actual) > MEANINGFUL_THRESHOLD:
        return 1.0
    return 0.0


def _rescale(projected: float, actual: float):
    """
    Work out how to move future values: (factor, rebaseline).

    With a meaningful projection the factor is actual / projected. When the
    projection was negligible but a positive actual arrived, the actual
    becomes the new baseline for negligible future values.
    """
    if projected > MEANINGFUL_THRESHOLD:
        return actual / projected, None
    if actual > MEANINGFUL_THRESHOLD:
        return actual, actual
    return 1.0, None


def _apply(value: float, factor: float, rebaseline: Optional[float]) -> float:
    if value > MEANINGFUL_THRESHOLD:
        return value * factor
    if rebaseline is not None:
        return rebaseline
    return value


def adjust_forecast(
    forecast: CashFlowForecast,
    actual_income: float,
    actual_expenses: float,
    period_index: int,
) -> CashFlowForecast:
    """
    Rescale the unelapsed tail of a forecast once a period's actuals are known.

    Nothing changes when the index is out of range, when both projected and
    actual totals are negligible, or when income and expenses are each within
    20% of projection. Otherwise every projection after `period_index` is
    scaled by actual / projected (per side) and a note is appended to the
    assumptions. The input forecast is never modified.
    """
    if not 0 <= period_index < len(forecast.projections):
        return forecast

    projection = forecast.projections[period_index]

    projected_total = abs(projection.projected_income) + abs(projection.projected_expenses)
    actual_total = abs(actual_income) + abs(actual_expenses)
    if projected_total < MEANINGFUL_THRESHOLD and actual_total < MEANINGFUL_THRESHOLD:
        return forecast

    income_deviation = _deviation(projection.projected_income, actual_income)
    expense_deviation = _deviation(projection.projected_expenses, actual_expenses)

    if income_deviation <= DEVIATION_THRESHOLD and expense_deviation <= DEVIATION_THRESHOLD:
        return forecast

    income_factor, income_baseline = _rescale(projection.projected_income, actual_income)
    expense_factor, expense_baseline = _rescale(projection.projected_expenses, actual_expenses)

    adjusted = []
    for index, proj in enumerate(forecast.projections):
        if index <= period_index:
            adjusted.append(proj)
            continue
        adjusted.append(
            MonthlyProjection.build(
                proj.month,
                _apply(proj.projected_income, income_factor, income_baseline),
                _apply(proj.projected_expenses, expense_factor, expense_baseline),
            )
        )

    logger.info(
        "Forecast adjusted from actuals",
        extra={
            "period_index": period_index,
            "income_deviation": round(income_deviation, 4),
            "expense_deviation": round(expense_deviation, 4),
        },
    )

    return replace(
        forecast,
        projections=tuple(adjusted),
        assumptions=forecast.assumptions + (ADJUSTMENT_NOTE,),
    )
