"""HTTP adapter: aiohttp implementation of the HTTP client port."""

from kiawah_concierge.adapters.http.client import HttpClient

__all__ = ["HttpClient"]
