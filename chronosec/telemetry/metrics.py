"""Prometheus metrics definitions."""

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

http_request_duration = Histogram(
    "http_request_duration_seconds",
    "Duration of HTTP requests in seconds",
    labelnames=["method", "endpoint", "status_code"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

http_requests_total = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    labelnames=["method", "endpoint", "status_code"],
)

timelines_generated = Counter(
    "chronosec_timelines_generated_total",
    "Timelines generated, by framework rule set",
    labelnames=["framework"],
)

ai_fallbacks = Counter(
    "chronosec_ai_fallbacks_total",
    "AI calls that fell back to deterministic output",
    labelnames=["operation"],
)

exports_total = Counter(
    "chronosec_exports_total",
    "Timeline documents exported",
    labelnames=["format"],
)


def get_metrics() -> tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST
