"""
In-Memory Event Bus Implementation.

Simple pub/sub implementation for domain events.
All handlers are async and exceptions are logged (not propagated).
"""

from __future__ import annotations

import asyncio
from collections import defaultdict
from collections.abc import Awaitable, Callable
from typing import TypeVar

from kiawah_concierge.domain.events import DomainEvent
from kiawah_concierge.observability.logging import get_logger
from kiawah_concierge.ports.event_bus import EventBusPort

logger = get_logger(__name__)

T = TypeVar("T", bound=DomainEvent)


class InMemoryEventBus(EventBusPort):
    """
    In-memory async event bus.

    Features:
    - Type-safe subscriptions
    - Async handlers
    - Exception isolation (one failing handler doesn't affect others)
    - Direct dispatch until started, queued dispatch afterwards
    - Graceful shutdown that drains queued events
    """

    def __init__(self):
        self._handlers: dict[type[DomainEvent], set[Callable[[DomainEvent], Awaitable[None]]]] = defaultdict(set)
        self._running = False
        self._queue: asyncio.Queue[DomainEvent | None] = asyncio.Queue()
        self._processor_task: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start the event bus processor."""
        if self._running:
            return

        self._running = True
        self._processor_task = asyncio.create_task(self._process_events(), name="event_bus_processor")
        logger.debug("Event bus started")

    async def stop(self) -> None:
        """Stop the event bus after every queued event has been dispatched."""
        if not self._running:
            return

        self._running = False

        # Sentinel: the processor finishes everything queued before it, then exits
        if self._processor_task:
            await self._queue.put(None)
            await asyncio.wait({self._processor_task})
            self._processor_task = None

        # Events left behind if the processor was gone before the sentinel
        while not self._queue.empty():
            event = self._queue.get_nowait()
            if event is not None:
                await self._dispatch(event)

        logger.debug("Event bus stopped")

    def subscribe(
        self,
        event_type: type[T],
        handler: Callable[[T], Awaitable[None]],
    ) -> None:
        """Subscribe to events of a specific type."""
        self._handlers[event_type].add(handler)  # type: ignore
        logger.debug(f"Subscribed to {event_type.__name__}")

    def unsubscribe(
        self,
        event_type: type[T],
        handler: Callable[[T], Awaitable[None]],
    ) -> None:
        """Unsubscribe a handler from an event type."""
        self._handlers[event_type].discard(handler)  # type: ignore

    async def publish(self, event: DomainEvent) -> None:
        """
        Publish an event to all subscribers.

        Events are queued and processed asynchronously once started.
        """
        if not self._running:
            # If not started, dispatch directly
            await self._dispatch(event)
            return

        await self._queue.put(event)

    def subscriber_count(self, event_type: type[DomainEvent]) -> int:
        """Get number of subscribers for an event type."""
        return len(self._handlers.get(event_type, set()))

    async def _process_events(self) -> None:
        """Background task to process events until the stop sentinel."""
        while True:
            event = await self._queue.get()
            if event is None:
                return
            await self._dispatch(event)

    async def _dispatch(self, event: DomainEvent) -> None:
        """Dispatch event to all registered handlers concurrently."""
        event_type = type(event)
        handlers = tuple(self._handlers.get(event_type, set()))

        if not handlers:
            logger.debug(f"No handlers for {event_type.__name__}")
            return

        async with asyncio.TaskGroup() as tg:
            for handler in handlers:
                tg.create_task(self._safe_call(handler, event))

    async def _safe_call(
        self,
        handler: Callable[[DomainEvent], Awaitable[None]],
        event: DomainEvent,
    ) -> None:
        """Call handler with exception isolation."""
        try:
            await handler(event)
        except Exception as e:
            handler_name = getattr(handler, "__name__", repr(handler))
            logger.exception(f"Handler {handler_name} failed for {type(event).__name__}: {e}")
