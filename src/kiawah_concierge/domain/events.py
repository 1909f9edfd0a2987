"""
Domain Events.

Events are immutable records of things that happened during a fetch-all
cycle. Observers (the presentation layer, diagnostics) subscribe to them
through the event bus instead of polling the state store.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime

from kiawah_concierge.domain.models import Slice


@dataclass(frozen=True, slots=True)
class DomainEvent:
    """Base class for all domain events."""

    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def event_type(self) -> str:
        return self.__class__.__name__


@dataclass(frozen=True, slots=True)
class SliceUpdated(DomainEvent):
    """Emitted after a slice snapshot has been replaced."""

    slice: Slice = Slice.PROPERTY
    owner: str = ""
    version: int = 0


@dataclass(frozen=True, slots=True)
class FetchFailed(DomainEvent):
    """Emitted when an adapter gave up; its slices keep their prior value."""

    source: str = ""
    slices: tuple[Slice, ...] = ()
    error_code: str = ""
    message: str = ""


@dataclass(frozen=True, slots=True)
class FetchCycleCompleted(DomainEvent):
    """Emitted once every adapter of a fetch-all cycle has finished."""

    succeeded: tuple[str, ...] = ()
    failed: tuple[str, ...] = ()
    duration_seconds: float = 0.0
