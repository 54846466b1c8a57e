"""Prometheus metrics for monitoring analysis volume, score distribution and bank fetches"""

from prometheus_client import Counter, Histogram

# Analysis metrics
analysis_counter = Counter(
    "wellness_analysis_total",
    "Total analyses served",
    ["endpoint"],  # budget | overview | wellness | context | categorize
)

wellness_score_histogram = Histogram(
    "wellness_score",
    "Distribution of composite wellness scores",
    buckets=[10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
)

recurring_charges_counter = Counter(
    "recurring_charges_detected_total",
    "Recurring charge candidates detected",
)

duplicate_charges_counter = Counter(
    "duplicate_charges_detected_total",
    "Possible duplicate charges flagged",
)

# Bank API metrics
bank_fetch_failures_counter = Counter(
    "bank_fetch_failures_total",
    "Failed bank data API calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_analysis(endpoint: str, score: int | None = None) -> None:
    """Record one served analysis, and the score when there is one"""
    analysis_counter.labels(endpoint=endpoint).inc()
    if score is not None:
        wellness_score_histogram.observe(score)


def record_patterns(recurring_count: int, duplicate_count: int) -> None:
    recurring_charges_counter.inc(recurring_count)
    duplicate_charges_counter.inc(duplicate_count)
