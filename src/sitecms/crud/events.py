"""In-process change notifications for content tables"""

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from enum import Enum
from typing import AsyncIterator, Optional
from uuid import UUID


logger = logging.getLogger(__name__)


class ChangeAction(str, Enum):
    insert = "INSERT"
    update = "UPDATE"
    delete = "DELETE"


@dataclass(frozen=True)
class ChangeEvent:
    """Something changed in table; subscribers treat every action alike."""
    table: str
    action: ChangeAction
    row_id: Optional[UUID] = None


_CLOSED = object()


class Subscription:
    """Async iterator over events for a set of tables; ends when the feed closes."""

    def __init__(self, tables: frozenset[str]):
        self.tables = tables
        self._queue: asyncio.Queue = asyncio.Queue()

    def wants(self, event: ChangeEvent) -> bool:
        return not self.tables or event.table in self.tables

    def _push(self, item) -> None:
        self._queue.put_nowait(item)

    def __aiter__(self) -> "Subscription":
        return self

    async def __anext__(self) -> ChangeEvent:
        item = await self._queue.get()
        if item is _CLOSED:
            raise StopAsyncIteration
        return item


class ChangeFeed:
    """Publish/subscribe channel; publishing never blocks and never fails on slow readers."""

    def __init__(self):
        self._subscriptions: list[Subscription] = []
        self.closed = False

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def publish(self, event: ChangeEvent) -> int:
        """Deliver event to every matching subscriber; returns the delivery count."""
        if self.closed:
            return 0
        delivered = 0
        for sub in self._subscriptions:
            if sub.wants(event):
                sub._push(event)
                delivered += 1
        logger.debug("published %s on %s to %d subscriber(s)", event.action.value, event.table, delivered)
        return delivered

    @asynccontextmanager
    async def subscribe(self, *tables: str) -> AsyncIterator[Subscription]:
        """Register a subscription for the duration of the block; empty tables means all."""
        sub = Subscription(frozenset(tables))
        if self.closed:
            sub._push(_CLOSED)
        self._subscriptions.append(sub)
        try:
            yield sub
        finally:
            self._subscriptions.remove(sub)

    def close(self) -> None:
        """End every open subscription stream."""
        self.closed = True
        for sub in self._subscriptions:
            sub._push(_CLOSED)

    def reopen(self) -> None:
        self.closed = False
