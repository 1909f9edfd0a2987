"""
Source adapter base.

An adapter fetches one external source, normalizes the response into domain
snapshots and commits them to the slices it owns. Every failure stops at
this boundary: it is logged, counted, published as ``FetchFailed`` and the
owned slices keep their previous value.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, ClassVar, ParamSpec, TypeVar
from zoneinfo import ZoneInfo

from kiawah_concierge.config.settings import Settings
from kiawah_concierge.domain.errors import SourceError
from kiawah_concierge.domain.events import FetchFailed
from kiawah_concierge.domain.models import Slice
from kiawah_concierge.observability.logging import LOG_TAG_FETCH, get_logger
from kiawah_concierge.observability.metrics import track_fetch_duration
from kiawah_concierge.ports.event_bus import EventBusPort
from kiawah_concierge.ports.http import HttpClientPort
from kiawah_concierge.ports.state_store import SliceWriterPort, StateStorePort
from kiawah_concierge.utils.timefmt import get_zone

logger = get_logger(__name__)

P = ParamSpec("P")
R = TypeVar("R")

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


class SourceAdapter(ABC):
    """
    Base class for all source adapters.

    Subclasses declare ``name`` and ``slices`` and implement ``load``.
    Slices are claimed at construction, so two adapters can never be wired
    to the same slice.
    """

    name: ClassVar[str]
    slices: ClassVar[tuple[Slice, ...]]

    def __init__(
        self,
        settings: Settings,
        http: HttpClientPort,
        store: StateStorePort,
        event_bus: EventBusPort,
        *,
        clock: Clock = utc_now,
    ):
        self._settings = settings
        self._http = http
        self._event_bus = event_bus
        self._clock = clock
        self._writers: dict[Slice, SliceWriterPort] = {
            slice_: store.claim(slice_, self.name) for slice_ in self.slices
        }

    @property
    def zone(self) -> ZoneInfo:
        return get_zone(self._settings.rental.timezone)

    def now(self) -> datetime:
        """Current instant, always timezone-aware."""
        value = self._clock()
        return value if value.tzinfo else value.replace(tzinfo=UTC)

    @abstractmethod
    async def load(self) -> dict[Slice, Any]:
        """
        Fetch and normalize the source.

        Returns the new value of every slice to replace. Raises a
        ``SourceError`` subclass when the source yields nothing usable.
        """
        ...

    async def refresh(self) -> bool:
        """
        Run one fetch and commit the result.

        Returns True if the owned slices were replaced. Never raises for
        source failures.
        """
        logger.info(f"{LOG_TAG_FETCH} {self.name} started")
        with track_fetch_duration(self.name) as outcome:
            try:
                values = await self.load()
            except SourceError as e:
                logger.warning(
                    f"{self.name} fetch failed [{e.error_code}]: {e.message}",
                    extra={"source": self.name, "error_code": e.error_code},
                )
                await self._publish_failure(e.error_code, e.message)
                return False
            except Exception as e:
                logger.exception(
                    f"{self.name} fetch failed unexpectedly: {e}",
                    extra={"source": self.name, "error_code": "UNEXPECTED"},
                )
                await self._publish_failure("UNEXPECTED", str(e))
                return False

            for slice_, value in values.items():
                await self._writers[slice_].commit(value)
            outcome["success"] = True

        logger.info(f"{LOG_TAG_FETCH} {self.name} updated {', '.join(s.value for s in values)}")
        return True

    async def parse_off_loop(self, func: Callable[P, R], *args: P.args, **kwargs: P.kwargs) -> R:
        """Run a parser in a worker thread, keeping the event loop free."""
        return await asyncio.to_thread(func, *args, **kwargs)

    async def _publish_failure(self, error_code: str, message: str) -> None:
        await self._event_bus.publish(
            FetchFailed(source=self.name, slices=self.slices, error_code=error_code, message=message)
        )
