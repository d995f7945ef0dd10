"""
Asynchronous publish/subscribe for domain events.

``publish`` puts the event on a bounded ``asyncio.Queue`` and returns
immediately; a single worker task started by ``start`` takes events off
the queue and awaits each subscribed handler in subscription order.

Delivery guarantees:

* at most once: an event published while the dispatcher is stopped or
  while the queue is full is dropped and logged;
* each accepted event reaches each handler exactly once;
* a failing handler is logged and does not stop the other handlers or
  the worker; nothing is reported back to the publisher.
"""

import asyncio
import logging
from collections import defaultdict
from typing import Any, Awaitable, Callable, DefaultDict, List, Optional

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Awaitable[None]]


class EventDispatcher:
    def __init__(self, maxsize: int = 100, drain_timeout: float = 5.0) -> None:
        self.maxsize = maxsize
        self.drain_timeout = drain_timeout
        self._subscribers: DefaultDict[type, List[Handler]] = defaultdict(list)
        self._queue: Optional[asyncio.Queue] = None
        self._worker: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    def subscribe(self, event_type: type, handler: Handler) -> None:
        """Register ``handler`` for events of exactly ``event_type``."""
        self._subscribers[event_type].append(handler)
        logger.debug("Subscribed %s to %s", _handler_name(handler), event_type.__name__)

    def publish(self, event: Any) -> bool:
        """Queue ``event`` for delivery without waiting.

        Must be called from the event loop the dispatcher was started on.
        Returns ``False`` when the event was dropped.
        """
        event_name = type(event).__name__
        if self._queue is None or not self.running:
            logger.error("Event dispatcher is not running; dropping %s", event_name)
            return False
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            logger.error("Event queue full (%d); dropping %s", self.maxsize, event_name)
            return False
        logger.debug("Queued %s (%d pending)", event_name, self._queue.qsize())
        return True

    async def start(self) -> None:
        """Create the queue and spawn the worker on the running loop."""
        if self.running:
            return
        self._queue = asyncio.Queue(maxsize=self.maxsize)
        self._worker = asyncio.create_task(self._run(), name="event-dispatcher")
        logger.info("Event dispatcher started (queue size %d)", self.maxsize)

    async def join(self) -> None:
        """Wait until every queued event has been handled."""
        if self._queue is not None:
            await self._queue.join()

    async def stop(self) -> None:
        """Drain pending events (up to ``drain_timeout`` seconds), then stop."""
        if self._worker is None:
            return
        try:
            await asyncio.wait_for(self.join(), timeout=self.drain_timeout)
        except asyncio.TimeoutError:
            logger.warning("Stopping event dispatcher with %d undelivered event(s)", self._queue.qsize())
        self._worker.cancel()
        try:
            await self._worker
        except asyncio.CancelledError:
            pass
        self._worker = None
        self._queue = None
        logger.info("Event dispatcher stopped")

    async def _run(self) -> None:
        while True:
            event = await self._queue.get()
            try:
                await self._deliver(event)
            finally:
                self._queue.task_done()

    async def _deliver(self, event: Any) -> None:
        for handler in list(self._subscribers.get(type(event), ())):
            try:
                await handler(event)
            except Exception:
                logger.exception("Listener %s failed on %s", _handler_name(handler), type(event).__name__)


def _handler_name(handler: Handler) -> str:
    return getattr(handler, "__qualname__", repr(handler))
