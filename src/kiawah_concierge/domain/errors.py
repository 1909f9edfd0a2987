"""
Domain Error Taxonomy.

Every failure an adapter can hit maps onto one of three source errors:
- TransportError: no usable response (connection failure, HTTP error status)
- DecodeError: a response arrived but does not have the expected shape
- SourceUnavailableError: a well-formed response that explicitly carries no data

All three are handled identically at the adapter boundary.
"""

from __future__ import annotations

from typing import Any


class ConciergeError(Exception):
    """
    Base class for all concierge errors.

    Includes structured error info for logging and debugging.
    """

    error_code: str = "CONCIERGE_ERROR"

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.source = source
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for logging."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "source": self.source,
            "details": self.details,
        }


# =============================================================================
# Source Errors (adapter boundary)
# =============================================================================


class SourceError(ConciergeError):
    """Fetching or normalizing an external source failed."""

    error_code = "SOURCE_ERROR"


class TransportError(SourceError):
    """No usable response from the source."""

    error_code = "TRANSPORT_ERROR"

    def __init__(self, message: str, *, status: int | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.status = status
        if status is not None:
            self.details["status"] = status


class DecodeError(SourceError):
    """Response body does not match the expected shape."""

    error_code = "DECODE_ERROR"


class SourceUnavailableError(SourceError):
    """Source answered, but explicitly without data (e.g. an upstream error payload)."""

    error_code = "SOURCE_UNAVAILABLE"


# =============================================================================
# Configuration & State Errors
# =============================================================================


class ConfigurationError(ConciergeError):
    """Invalid or incomplete configuration."""

    error_code = "CONFIGURATION_ERROR"


class SliceOwnershipError(ConciergeError):
    """A slice was claimed by a writer that does not own it."""

    error_code = "SLICE_OWNERSHIP"
