"""
HTTP Client Port: the only way source adapters talk to the network.

Implementations raise ``TransportError`` when no usable response arrives
and ``DecodeError`` when a JSON body cannot be decoded.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from kiawah_concierge.domain.models import HeroImage


class HttpClientPort(ABC):
    """Abstract interface for outbound GET requests."""

    @abstractmethod
    async def initialize(self) -> None:
        """Open the underlying session."""
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close the underlying session."""
        ...

    @abstractmethod
    async def get_json(
        self,
        url: str,
        params: Mapping[str, Any] | None = None,
        *,
        source: str | None = None,
    ) -> Any:
        """
        GET ``url`` and decode the body as JSON.

        Args:
            url: Absolute URL.
            params: Query parameters.
            source: Adapter name, attached to raised errors.
        """
        ...

    @abstractmethod
    async def get_bytes(self, url: str, *, source: str | None = None) -> HeroImage:
        """GET ``url`` and return the raw body with its content type."""
        ...
