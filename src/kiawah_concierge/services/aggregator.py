"""
Aggregator: one fetch-all cycle.

Every adapter runs concurrently as an independent coroutine and commits its
own slices as soon as it finishes. The cycle returns once all of them are
done. A join-all is used instead of a TaskGroup so that one failing adapter
never cancels its siblings.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Sequence
from dataclasses import dataclass, field

from kiawah_concierge.adapters.sources.base import SourceAdapter
from kiawah_concierge.domain.events import FetchCycleCompleted
from kiawah_concierge.observability.logging import LOG_TAG_CYCLE, get_logger
from kiawah_concierge.observability.metrics import record_cycle
from kiawah_concierge.ports.event_bus import EventBusPort

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class FetchCycleReport:
    """Outcome of one fetch-all cycle."""

    results: dict[str, bool] = field(default_factory=dict)
    duration_seconds: float = 0.0

    @property
    def succeeded(self) -> list[str]:
        return [name for name, ok in self.results.items() if ok]

    @property
    def failed(self) -> list[str]:
        return [name for name, ok in self.results.items() if not ok]

    @property
    def all_succeeded(self) -> bool:
        return all(self.results.values())


class Aggregator:
    """Runs all source adapters as one fetch-all cycle."""

    def __init__(self, adapters: Sequence[SourceAdapter], event_bus: EventBusPort):
        names = [adapter.name for adapter in adapters]
        if len(set(names)) != len(names):
            raise ValueError(f"Adapter names must be unique: {names}")
        self._adapters = tuple(adapters)
        self._event_bus = event_bus

    @property
    def adapters(self) -> tuple[SourceAdapter, ...]:
        return self._adapters

    async def fetch_all(self) -> FetchCycleReport:
        """
        Refresh every adapter and wait for all of them.

        Never raises for adapter failures; they are reported in the result.
        """
        start = time.perf_counter()
        logger.info(f"{LOG_TAG_CYCLE} Fetching {len(self._adapters)} sources")

        outcomes = await asyncio.gather(
            *(adapter.refresh() for adapter in self._adapters),
            return_exceptions=True,
        )

        results: dict[str, bool] = {}
        for adapter, outcome in zip(self._adapters, outcomes, strict=True):
            if isinstance(outcome, BaseException):
                if isinstance(outcome, asyncio.CancelledError):
                    raise outcome
                logger.error(
                    f"{adapter.name} escaped its error boundary: {outcome!r}",
                    exc_info=(type(outcome), outcome, outcome.__traceback__),
                )
                results[adapter.name] = False
            else:
                results[adapter.name] = bool(outcome)

        report = FetchCycleReport(results=results, duration_seconds=time.perf_counter() - start)
        record_cycle(len(report.failed))
        logger.info(
            f"{LOG_TAG_CYCLE} Done in {report.duration_seconds:.2f}s: "
            f"ok={report.succeeded or '-'} failed={report.failed or '-'}"
        )
        await self._event_bus.publish(
            FetchCycleCompleted(
                succeeded=tuple(report.succeeded),
                failed=tuple(report.failed),
                duration_seconds=report.duration_seconds,
            )
        )
        return report
