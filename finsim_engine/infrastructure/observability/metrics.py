"""Prometheus metrics for monitoring projections, risk distribution, and advice service performance"""

from prometheus_client import Counter, Histogram

# Engine metrics
projection_counter = Counter(
    "finsim_projection_total",
    "Total projections run",
    ["kind"],  # projection | scenario | portfolio
)

projection_horizon_histogram = Histogram(
    "finsim_projection_horizon_months",
    "Requested projection horizon",
    buckets=[0, 1, 6, 12, 24, 60, 120, 360, 600],
)

risk_band_counter = Counter(
    "finsim_risk_band_total",
    "Risk assessments by classifier band",
    ["metric", "band"],  # emergency_fund | debt_to_income
)

# Advice service metrics
advisor_latency_histogram = Histogram(
    "advisor_latency_seconds",
    "Advice service response time",
    buckets=[0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 30.0],
)

advisor_failure_counter = Counter(
    "advisor_failures_total",
    "Failed advice service calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_projection(kind: str, horizon_months: int) -> None:
    """Record a projection run and its horizon"""
    projection_counter.labels(kind=kind).inc()
    projection_horizon_histogram.observe(horizon_months)


def record_risk_assessment(emergency_fund_band: str, debt_to_income_band: str) -> None:
    """Record classifier outcomes for monitoring the band distribution"""
    risk_band_counter.labels(metric="emergency_fund", band=emergency_fund_band).inc()
    risk_band_counter.labels(metric="debt_to_income", band=debt_to_income_band).inc()
