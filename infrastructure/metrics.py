"""Prometheus metrics for the voicing service.

Labels carry the solve outcome so dashboards show how often progressions
are actually re-voiced versus passed through.

Metrics:
    voicing_solves_total             Counter by outcome (optimized/passthrough/single/empty)
    voicing_solve_latency_seconds    Histogram of solver wall-clock time
    voicing_candidates_per_chord     Histogram of candidate voicings generated per chord
    voicing_request_errors_total     Requests rejected by endpoint

Usage::

    from infrastructure.metrics import LatencyTimer, record_solve

    with LatencyTimer() as t:
        result = solve_voicing_sequence(sources, options)
    record_solve(outcome=result.outcome, latency_seconds=t.elapsed)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

logger = logging.getLogger(__name__)

_REGISTRY = CollectorRegistry()

voicing_solves_total = Counter(
    "voicing_solves_total",
    "Voicing solves by outcome",
    ["outcome"],
    registry=_REGISTRY,
)

voicing_solve_latency_seconds = Histogram(
    "voicing_solve_latency_seconds",
    "Voicing solver wall-clock time in seconds",
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
    registry=_REGISTRY,
)

voicing_candidates_per_chord = Histogram(
    "voicing_candidates_per_chord",
    "Candidate voicings generated for a single chord",
    buckets=[0, 50, 100, 200, 300, 400, 500, 750, 1000],
    registry=_REGISTRY,
)

voicing_request_errors_total = Counter(
    "voicing_request_errors_total",
    "Voicing requests rejected by endpoint",
    ["endpoint"],
    registry=_REGISTRY,
)

logger.info("Prometheus metrics registry initialized")


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------


def record_solve(*, outcome: str, latency_seconds: float) -> None:
    """Record a completed solve.

    Args:
        outcome: SolveResult.outcome ("optimized", "passthrough", "single", "empty").
        latency_seconds: Solver wall-clock time in seconds.
    """
    voicing_solves_total.labels(outcome=outcome).inc()
    voicing_solve_latency_seconds.observe(latency_seconds)


def record_candidate_counts(counts: Iterable[int]) -> None:
    """Observe the candidate count of each chord in a solve."""
    for count in counts:
        voicing_candidates_per_chord.observe(count)


def record_request_error(endpoint: str) -> None:
    """Increment the rejected-request counter for an endpoint."""
    voicing_request_errors_total.labels(endpoint=endpoint).inc()


def get_metrics_response() -> tuple[bytes, str]:
    """Generate Prometheus text exposition format.

    Returns:
        Tuple of (body_bytes, content_type_string).
    """
    return generate_latest(_REGISTRY), CONTENT_TYPE_LATEST


class LatencyTimer:
    """Context manager for measuring latency.

    Usage::

        with LatencyTimer() as t:
            result = solve_voicing_sequence(sources)
        record_solve(outcome=result.outcome, latency_seconds=t.elapsed)
    """

    def __init__(self) -> None:
        self._start: float = 0.0
        self.elapsed: float = 0.0

    def __enter__(self) -> LatencyTimer:
        self._start = time.perf_counter()
        return self

    def __exit__(self, *_: object) -> None:
        self.elapsed = time.perf_counter() - self._start
