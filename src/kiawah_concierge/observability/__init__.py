"""Observability: logging, metrics."""

from kiawah_concierge.observability.logging import (
    LOG_TAG_CYCLE,
    LOG_TAG_FETCH,
    LOG_TAG_SLICE,
    get_logger,
    setup_logging,
)
from kiawah_concierge.observability.metrics import (
    record_cycle,
    record_fetch,
    record_slice_update,
    track_fetch_duration,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "LOG_TAG_FETCH",
    "LOG_TAG_SLICE",
    "LOG_TAG_CYCLE",
    # Metrics helpers
    "record_fetch",
    "record_slice_update",
    "record_cycle",
    "track_fetch_duration",
]
