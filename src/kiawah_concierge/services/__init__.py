"""Services: the shared state store and the fetch-all aggregator."""

from kiawah_concierge.services.aggregator import Aggregator, FetchCycleReport
from kiawah_concierge.services.state_store import SliceWriter, StateStore

__all__ = ["Aggregator", "FetchCycleReport", "StateStore", "SliceWriter"]
