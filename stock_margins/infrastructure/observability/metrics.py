"""Prometheus metrics for margin calculations and HTTP latency"""

from prometheus_client import Counter, Histogram

from stock_margins.domain.models import ProfitCategory

# Calculation metrics
margin_calculation_counter = Counter(
    "vehicle_margin_calculations_total",
    "Total vehicle margin calculation attempts",
    ["outcome"],  # calculated | invalid
)

profit_category_counter = Counter(
    "vehicle_profit_category_total",
    "Calculated vehicles by profit category",
    ["category"],  # LOW | MEDIUM | HIGH
)

overview_size_histogram = Histogram(
    "margins_overview_items",
    "Vehicles returned per margins overview request",
    buckets=[0, 10, 50, 100, 250, 500, 1000, 5000],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_margin_calculated(category: ProfitCategory) -> None:
    """Count a successful calculation and its profit tier"""
    margin_calculation_counter.labels(outcome="calculated").inc()
    profit_category_counter.labels(category=category.value).inc()


def record_margin_rejected() -> None:
    """Count a calculation refused by validation"""
    margin_calculation_counter.labels(outcome="invalid").inc()
