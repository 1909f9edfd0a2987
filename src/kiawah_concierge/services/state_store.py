"""
Shared State Store.

Holds the latest snapshot of every slice. Each slice has exactly one
writer, obtained through ``claim``; readers always see whole snapshots
because a commit replaces the value wholesale.

Commits run on the store's owning event loop. A commit awaited on any other
loop is marshaled over with ``run_coroutine_threadsafe`` so observers are
always notified from the owning loop.
"""

from __future__ import annotations

import asyncio
from typing import Any

from kiawah_concierge.domain.errors import SliceOwnershipError
from kiawah_concierge.domain.events import SliceUpdated
from kiawah_concierge.domain.models import Slice, default_slice_value
from kiawah_concierge.observability.logging import LOG_TAG_SLICE, get_logger
from kiawah_concierge.observability.metrics import record_slice_update
from kiawah_concierge.ports.event_bus import EventBusPort
from kiawah_concierge.ports.state_store import SliceObserver, SliceWriterPort, StateStorePort

logger = get_logger(__name__)


class SliceWriter(SliceWriterPort):
    """Write handle for one slice."""

    def __init__(self, store: StateStore, slice_: Slice, owner: str):
        self.slice = slice_
        self.owner = owner
        self._store = store

    async def commit(self, value: Any) -> int:
        return await self._store._commit(self.slice, self.owner, value)

    def __repr__(self) -> str:
        return f"SliceWriter(slice={self.slice.value}, owner={self.owner!r})"


class StateStore(StateStorePort):
    """
    In-memory slice store.

    Args:
        event_bus: Bus on which ``SliceUpdated`` events are published.
        loop: Owning loop. Defaults to the loop of the first commit.
    """

    def __init__(self, event_bus: EventBusPort, *, loop: asyncio.AbstractEventLoop | None = None):
        self._event_bus = event_bus
        self._loop = loop
        self._values: dict[Slice, Any] = {slice_: default_slice_value(slice_) for slice_ in Slice}
        self._versions: dict[Slice, int] = dict.fromkeys(Slice, 0)
        self._writers: dict[Slice, SliceWriter] = {}

    # =========================================================================
    # Reads
    # =========================================================================

    def get(self, slice_: Slice) -> Any:
        return self._values[slice_]

    def version(self, slice_: Slice) -> int:
        return self._versions[slice_]

    def snapshot(self) -> dict[Slice, Any]:
        return dict(self._values)

    def owner_of(self, slice_: Slice) -> str | None:
        writer = self._writers.get(slice_)
        return writer.owner if writer else None

    # =========================================================================
    # Ownership
    # =========================================================================

    def claim(self, slice_: Slice, owner: str) -> SliceWriter:
        existing = self._writers.get(slice_)
        if existing is not None:
            if existing.owner != owner:
                raise SliceOwnershipError(
                    f"Slice {slice_.value} is owned by {existing.owner!r}, not {owner!r}",
                    details={"slice": slice_.value, "owner": existing.owner, "claimant": owner},
                )
            return existing

        writer = SliceWriter(self, slice_, owner)
        self._writers[slice_] = writer
        logger.debug(f"{owner} claimed slice {slice_.value}")
        return writer

    # =========================================================================
    # Observers
    # =========================================================================

    def subscribe(self, observer: SliceObserver) -> None:
        self._event_bus.subscribe(SliceUpdated, observer)

    def unsubscribe(self, observer: SliceObserver) -> None:
        self._event_bus.unsubscribe(SliceUpdated, observer)

    # =========================================================================
    # Commit
    # =========================================================================

    async def _commit(self, slice_: Slice, owner: str, value: Any) -> int:
        current = asyncio.get_running_loop()
        if self._loop is None:
            self._loop = current

        if current is self._loop:
            return await self._apply(slice_, owner, value)

        future = asyncio.run_coroutine_threadsafe(self._apply(slice_, owner, value), self._loop)
        return await asyncio.wrap_future(future)

    async def _apply(self, slice_: Slice, owner: str, value: Any) -> int:
        self._values[slice_] = value
        self._versions[slice_] += 1
        version = self._versions[slice_]

        record_slice_update(slice_.value)
        logger.info(f"{LOG_TAG_SLICE} {slice_.value} v{version} committed by {owner}")

        await self._event_bus.publish(SliceUpdated(slice=slice_, owner=owner, version=version))
        return version
