"""
Adapters: Concrete implementations of ports.

This layer contains all external integrations:
- HTTP client (aiohttp)
- Messaging adapters (EventBus)
- Source adapters (property feed, weather, sun times, tides)
"""
