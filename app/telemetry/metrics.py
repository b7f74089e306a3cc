"""Prometheus metrics definitions and helpers."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests processed",
    ("method", "route", "status"),
)

REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ("method", "route"),
    buckets=(
        0.005,
        0.01,
        0.025,
        0.05,
        0.1,
        0.25,
        0.5,
        1.0,
        2.5,
        5.0,
        10.0,
    ),
)

ERROR_COUNTER = Counter(
    "app_internal_errors_total",
    "Number of requests ending in internal server error responses",
    ("method", "route"),
)

PIPELINE_RUNS = Counter(
    "animation_pipeline_runs_total",
    "Animation pipeline runs by outcome",
    ("outcome",),
)

PIPELINE_FAILURES = Counter(
    "animation_pipeline_failures_total",
    "Animation pipeline failures by error category and stage",
    ("category", "stage"),
)

STAGE_DURATION = Histogram(
    "animation_pipeline_stage_duration_seconds",
    "Wall time spent in each animation pipeline stage",
    ("stage",),
    buckets=(
        0.05,
        0.1,
        0.25,
        0.5,
        1.0,
        2.5,
        5.0,
        10.0,
        30.0,
        60.0,
        120.0,
    ),
)


def observe_request(
    method: str,
    route: str,
    status_code: int,
    duration_seconds: float,
) -> None:
    """Record metrics for a completed HTTP request."""

    safe_route = route or "unknown"
    safe_method = method or "UNKNOWN"
    status_label = str(status_code)
    observed_duration = duration_seconds if duration_seconds >= 0 else 0

    REQUEST_COUNT.labels(
        method=safe_method,
        route=safe_route,
        status=status_label,
    ).inc()
    REQUEST_LATENCY.labels(
        method=safe_method,
        route=safe_route,
    ).observe(observed_duration)

    if status_code >= 500:
        ERROR_COUNTER.labels(
            method=safe_method,
            route=safe_route,
        ).inc()


def observe_stage(stage: str, duration_seconds: float) -> None:
    """Record how long one pipeline stage took."""

    STAGE_DURATION.labels(stage=stage).observe(max(duration_seconds, 0.0))


def record_pipeline_outcome(category: str | None, stage: str | None = None) -> None:
    """Count a finished run; ``category`` is None on success."""

    if category is None:
        PIPELINE_RUNS.labels(outcome="success").inc()
        return

    PIPELINE_RUNS.labels(outcome="failure").inc()
    PIPELINE_FAILURES.labels(category=category, stage=stage or "unknown").inc()
