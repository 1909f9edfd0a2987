"""
Shared HTTP client on aiohttp.

One ``ClientSession`` serves every source adapter for the lifetime of the
client. Transport defaults are left to aiohttp unless a total timeout is
configured. There are no retries: a failed request fails the fetch.

Usage:
    async with HttpClient(settings.http) as http:
        payload = await http.get_json(url, {"station": "8667062"}, source="tides")
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import aiohttp

from kiawah_concierge.config.settings import HttpSettings
from kiawah_concierge.domain.errors import DecodeError, TransportError
from kiawah_concierge.domain.models import HeroImage
from kiawah_concierge.observability.logging import get_logger
from kiawah_concierge.ports.http import HttpClientPort

logger = get_logger(__name__)


class HttpClient(HttpClientPort):
    """
    aiohttp-backed implementation of the HTTP client port.

    Maps every failure onto the source error taxonomy:
    - connection errors, timeouts and HTTP status >= 400 -> TransportError
    - bodies that are not JSON -> DecodeError
    """

    def __init__(self, settings: HttpSettings | None = None):
        self._settings = settings or HttpSettings()
        self._session: aiohttp.ClientSession | None = None

        # Statistics
        self._stats = {
            "total_requests": 0,
            "successful_requests": 0,
            "failed_requests": 0,
        }

    async def __aenter__(self) -> HttpClient:
        await self.initialize()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def initialize(self) -> None:
        """Initialize the HTTP session."""
        if self._session is not None:
            return

        kwargs: dict[str, Any] = {"headers": {"User-Agent": self._settings.user_agent}}
        if self._settings.timeout_seconds is not None:
            kwargs["timeout"] = aiohttp.ClientTimeout(total=self._settings.timeout_seconds)
        self._session = aiohttp.ClientSession(**kwargs)
        logger.debug("HTTP session opened")

    async def close(self) -> None:
        """Close the HTTP session and cleanup resources."""
        if self._session:
            await self._session.close()
            self._session = None
            logger.debug("HTTP session closed")

    async def get_json(
        self,
        url: str,
        params: Mapping[str, Any] | None = None,
        *,
        source: str | None = None,
    ) -> Any:
        body = await self._get(url, params, source=source)
        try:
            return json.loads(body)
        except (UnicodeDecodeError, ValueError) as e:
            raise DecodeError(f"Response from {url} is not valid JSON: {e}", source=source) from e

    async def get_bytes(self, url: str, *, source: str | None = None) -> HeroImage:
        await self.initialize()
        assert self._session is not None
        self._stats["total_requests"] += 1
        try:
            async with self._session.get(url) as response:
                self._raise_for_status(response, url, source)
                content = await response.read()
                content_type = response.headers.get("Content-Type", "")
        except (TimeoutError, aiohttp.ClientError) as e:
            self._stats["failed_requests"] += 1
            raise TransportError(f"GET {url} failed: {e}", source=source) from e

        self._stats["successful_requests"] += 1
        return HeroImage(content=content, content_type=content_type)

    async def _get(self, url: str, params: Mapping[str, Any] | None, *, source: str | None) -> bytes:
        await self.initialize()
        assert self._session is not None
        self._stats["total_requests"] += 1
        try:
            async with self._session.get(url, params=dict(params) if params else None) as response:
                self._raise_for_status(response, url, source)
                body = await response.read()
        except (TimeoutError, aiohttp.ClientError) as e:
            self._stats["failed_requests"] += 1
            raise TransportError(f"GET {url} failed: {e}", source=source) from e

        self._stats["successful_requests"] += 1
        return body

    def _raise_for_status(self, response: aiohttp.ClientResponse, url: str, source: str | None) -> None:
        if response.status >= 400:
            self._stats["failed_requests"] += 1
            raise TransportError(
                f"GET {url} returned HTTP {response.status}",
                status=response.status,
                source=source,
            )

    def get_stats(self) -> dict[str, Any]:
        """Get client statistics."""
        total = self._stats["total_requests"]
        success_rate = self._stats["successful_requests"] / total if total > 0 else 0
        return {**self._stats, "success_rate": f"{success_rate:.1%}"}
