"""
Ports: Abstract interfaces for external dependencies.

This follows the Ports & Adapters (Hexagonal) architecture pattern.
Services and source adapters depend only on these interfaces, not on
concrete implementations.
"""

from kiawah_concierge.ports.event_bus import EventBusPort
from kiawah_concierge.ports.http import HttpClientPort
from kiawah_concierge.ports.state_store import SliceWriterPort, StateStorePort

__all__ = ["EventBusPort", "HttpClientPort", "StateStorePort", "SliceWriterPort"]
