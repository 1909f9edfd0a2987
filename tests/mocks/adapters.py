"""
Adapter Mocks for Testing.

Provides a fake HTTP client so source adapters can be exercised without
hitting real APIs.
"""

from collections.abc import Mapping
from typing import Any

from kiawah_concierge.domain.errors import TransportError
from kiawah_concierge.domain.models import HeroImage
from kiawah_concierge.ports.http import HttpClientPort


class FakeHttpClient(HttpClientPort):
    """
    Canned responses keyed by URL.

    A route value that is an exception instance is raised instead of
    returned. Unrouted URLs raise TransportError (as a refused connection).
    """

    def __init__(self, routes: dict[str, Any] | None = None):
        self.routes: dict[str, Any] = dict(routes or {})
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def route(self, url: str, response: Any) -> None:
        self.routes[url] = response

    async def initialize(self) -> None:
        return None

    async def close(self) -> None:
        return None

    def _respond(self, url: str, source: str | None) -> Any:
        if url not in self.routes:
            raise TransportError(f"No route for {url}", source=source)
        response = self.routes[url]
        if isinstance(response, BaseException):
            raise response
        return response

    async def get_json(
        self,
        url: str,
        params: Mapping[str, Any] | None = None,
        *,
        source: str | None = None,
    ) -> Any:
        self.calls.append((url, dict(params or {})))
        return self._respond(url, source)

    async def get_bytes(self, url: str, *, source: str | None = None) -> HeroImage:
        self.calls.append((url, {}))
        response = self._respond(url, source)
        if isinstance(response, HeroImage):
            return response
        return HeroImage(content=bytes(response), content_type="image/jpeg")

    def params_for(self, url: str) -> dict[str, Any]:
        """Query parameters of the last call to ``url``."""
        for called_url, params in reversed(self.calls):
            if called_url == url:
                return params
        raise AssertionError(f"{url} was never requested")
