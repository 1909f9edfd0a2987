"""
Prometheus metrics for observability.

Provides metrics for source fetches and state-store slice updates.

Usage:
    from kiawah_concierge.observability.metrics import record_fetch

    record_fetch(source="tides", success=True, duration_seconds=0.4)
"""

from __future__ import annotations

import time
from collections.abc import Generator
from contextlib import contextmanager

from prometheus_client import Counter, Gauge, Histogram

# =============================================================================
# Metric Definitions
# =============================================================================

fetch_total = Counter(
    "concierge_fetch_total",
    "Total source fetches",
    ["source", "outcome"],  # outcome: success, failure
)

fetch_duration_seconds = Histogram(
    "concierge_fetch_duration_seconds",
    "Duration of source fetches in seconds",
    ["source"],
    buckets=(0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0),
)

slice_updates_total = Counter(
    "concierge_slice_updates_total",
    "Total committed slice replacements",
    ["slice"],
)

last_cycle_failed_sources = Gauge(
    "concierge_last_cycle_failed_sources",
    "Number of sources that failed in the most recent fetch-all cycle",
)


# =============================================================================
# Helper Functions
# =============================================================================


def record_fetch(source: str, success: bool, duration_seconds: float) -> None:
    """
    Record one source fetch.

    Args:
        source: Adapter name (e.g. "open_meteo")
        success: Whether the adapter committed new values
        duration_seconds: Wall time of the fetch including parsing
    """
    outcome = "success" if success else "failure"
    fetch_total.labels(source=source, outcome=outcome).inc()
    fetch_duration_seconds.labels(source=source).observe(duration_seconds)


def record_slice_update(slice_name: str) -> None:
    """Record a committed slice replacement."""
    slice_updates_total.labels(slice=slice_name).inc()


def record_cycle(failed_count: int) -> None:
    """Record the outcome of a fetch-all cycle."""
    last_cycle_failed_sources.set(failed_count)


@contextmanager
def track_fetch_duration(source: str) -> Generator[dict[str, bool], None, None]:
    """
    Context manager to time a fetch.

    Usage:
        with track_fetch_duration("tides") as outcome:
            ...
            outcome["success"] = True
    """
    outcome = {"success": False}
    start = time.perf_counter()
    try:
        yield outcome
    finally:
        record_fetch(source, outcome["success"], time.perf_counter() - start)
