"""
Observable queries.

A ``LiveQuery`` wraps a synchronous query function and the tables it reads.
Iterating it yields the current result and then a fresh result every time the
``InvalidationTracker`` reports a committed change to one of those tables.

Usage:
    async for items in repository.get_items():
        render(items)
"""

import asyncio
import logging
import threading
from typing import AsyncIterator, Callable, Dict, Generic, Iterable, Optional, Set, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Subscription:
    """Wakes one waiting consumer on its own event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop):
        self.loop = loop
        self.event = asyncio.Event()
        # set when rows were deleted since the consumer last read
        self.rows_deleted = False

    def _set(self, deleted: bool):
        if deleted:
            self.rows_deleted = True
        self.event.set()

    def wake(self, deleted: bool = False):
        try:
            self.loop.call_soon_threadsafe(self._set, deleted)
        except RuntimeError:
            # loop already closed, consumer is gone
            pass


class InvalidationTracker:
    """
    Registry of live-query subscriptions keyed by table name.

    ``notify`` is called by the store after a commit and is safe to call from
    any thread. ``deleted=True`` marks commits that removed rows.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._subscriptions: Dict[str, Set[_Subscription]] = {}

    def subscribe(self, tables: Iterable[str]) -> _Subscription:
        subscription = _Subscription(asyncio.get_running_loop())
        with self._lock:
            for table in tables:
                self._subscriptions.setdefault(table, set()).add(subscription)
        return subscription

    def unsubscribe(self, subscription: _Subscription):
        with self._lock:
            for table in list(self._subscriptions):
                subscribers = self._subscriptions[table]
                subscribers.discard(subscription)
                if not subscribers:
                    del self._subscriptions[table]

    def notify(self, table: str, deleted: bool = False):
        with self._lock:
            subscribers = list(self._subscriptions.get(table, ()))
        logger.debug("Table %s invalidated, waking %d live queries", table, len(subscribers))
        for subscription in subscribers:
            subscription.wake(deleted)

    def subscriber_count(self, table: str) -> int:
        with self._lock:
            return len(self._subscriptions.get(table, ()))


class LiveQuery(Generic[T]):
    """
    Async stream of query results that re-emits after every invalidation.

    Args:
        tracker: Tracker the store notifies on commit
        tables: Tables the query reads
        query: Blocking function returning the current result; run off the event loop
        skip_missing: Do not emit ``None`` results
        distinct: Do not emit a result equal to the previous emission; a delete or a
            missing result resets the comparison
    """

    def __init__(
        self,
        tracker: InvalidationTracker,
        tables: Tuple[str, ...],
        query: Callable[[], Optional[T]],
        skip_missing: bool = False,
        distinct: bool = False,
    ):
        self.tracker = tracker
        self.tables = tables
        self.query = query
        self.skip_missing = skip_missing
        self.distinct = distinct

    def __aiter__(self) -> AsyncIterator[T]:
        return self._stream()

    async def _stream(self) -> AsyncIterator[T]:
        # subscribe before the first read so no commit slips in between
        subscription = self.tracker.subscribe(self.tables)
        emitted = False
        last = None
        try:
            while True:
                subscription.event.clear()
                if subscription.rows_deleted:
                    # a row that comes back after a delete counts as new
                    subscription.rows_deleted = False
                    emitted = False
                    last = None
                value = await asyncio.to_thread(self.query)
                if value is None and self.skip_missing:
                    emitted = False
                    last = None
                elif self.distinct and emitted and value == last:
                    pass
                else:
                    emitted = True
                    last = value
                    yield value
                await subscription.event.wait()
        finally:
            self.tracker.unsubscribe(subscription)

    async def first(self) -> T:
        """First emitted value. Pending forever for a missing row unless wrapped in a timeout."""
        stream = self._stream()
        try:
            return await stream.__anext__()
        finally:
            await stream.aclose()

    async def snapshot(self) -> Optional[T]:
        """Current result without subscribing; ``None`` for a missing row."""
        return await asyncio.to_thread(self.query)
