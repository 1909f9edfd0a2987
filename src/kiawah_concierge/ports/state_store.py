"""
State Store Port: the shared, slice-partitioned state.

Each slice has exactly one writer. Readers always see whole snapshots.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any

from kiawah_concierge.domain.events import SliceUpdated
from kiawah_concierge.domain.models import Slice

SliceObserver = Callable[[SliceUpdated], Awaitable[None]]


class SliceWriterPort(ABC):
    """Write handle for one slice, held by its owning adapter."""

    slice: Slice
    owner: str

    @abstractmethod
    async def commit(self, value: Any) -> int:
        """
        Replace the slice wholesale.

        Returns the new slice version.
        """
        ...


class StateStorePort(ABC):
    """Abstract interface for the shared state store."""

    @abstractmethod
    def get(self, slice_: Slice) -> Any:
        """Latest committed value of a slice (the default before any commit)."""
        ...

    @abstractmethod
    def version(self, slice_: Slice) -> int:
        """Number of commits to a slice so far."""
        ...

    @abstractmethod
    def snapshot(self) -> dict[Slice, Any]:
        """Current value of every slice."""
        ...

    @abstractmethod
    def claim(self, slice_: Slice, owner: str) -> SliceWriterPort:
        """
        Get the writer for a slice.

        Raises:
            SliceOwnershipError: The slice is already owned by someone else.
        """
        ...

    @abstractmethod
    def subscribe(self, observer: SliceObserver) -> None:
        """Register an async observer of slice updates."""
        ...

    @abstractmethod
    def unsubscribe(self, observer: SliceObserver) -> None:
        """Remove a previously registered observer."""
        ...
