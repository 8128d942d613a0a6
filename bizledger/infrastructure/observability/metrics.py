"""Prometheus metrics for forecast quality, adjustments and cache efficiency"""

from prometheus_client import Counter, Histogram

# Forecast metrics
forecast_counter = Counter(
    "bizledger_forecast_total",
    "Cash-flow forecasts generated",
    ["confidence_band"],  # high | medium | low
)

forecast_adjustment_counter = Counter(
    "bizledger_forecast_adjustment_total",
    "Forecast adjustment requests",
    ["outcome"],  # adjusted | unchanged
)

# Cache metrics
cache_request_counter = Counter(
    "bizledger_cache_requests_total",
    "Result cache lookups",
    ["result"],  # hit | miss
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def confidence_band(confidence: float) -> str:
    if confidence >= 0.8:
        return "high"
    elif confidence >= 0.7:
        return "medium"
    return "low"


def record_forecast(confidence: float) -> None:
    """Record one generated forecast by confidence band"""
    forecast_counter.labels(confidence_band=confidence_band(confidence)).inc()


def record_adjustment(adjusted: bool) -> None:
    forecast_adjustment_counter.labels(outcome="adjusted" if adjusted else "unchanged").inc()
