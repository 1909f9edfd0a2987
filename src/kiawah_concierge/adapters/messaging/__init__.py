"""Messaging adapter: in-process event bus."""

from kiawah_concierge.adapters.messaging.event_bus import InMemoryEventBus

__all__ = ["InMemoryEventBus"]
