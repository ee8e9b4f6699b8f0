"""Observable in-memory state store.

Holds a single immutable snapshot. Every update swaps in a new snapshot and
publishes it to all observers before returning, so no observer ever sees a
partially applied update.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StateStore(Generic[T]):
    """Single source of truth for one observable value.

    Must only be used from the event loop thread: updates are plain
    synchronous calls and never interleave with one another.
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._listeners: list[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        return self._value

    def update(self, fn: Callable[[T], T]) -> T:
        """Apply `fn` to the current snapshot and publish the result.

        Args:
            fn: Pure function computing the new snapshot from the old one.

        Returns:
            The new snapshot.
        """
        new_value = fn(self._value)
        self._value = new_value
        for listener in list(self._listeners):
            try:
                listener(new_value)
            except Exception as e:
                logger.error(f"State listener {listener!r} failed: {e}", exc_info=True)
        return new_value

    def set(self, value: T) -> T:
        return self.update(lambda _: value)

    def subscribe(self, listener: Callable[[T], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def stream(self) -> AsyncIterator[T]:
        """Yield the current value, then every published value in order."""
        queue: asyncio.Queue[T] = asyncio.Queue()
        unsubscribe = self.subscribe(queue.put_nowait)
        try:
            yield self._value
            while True:
                yield await queue.get()
        finally:
            unsubscribe()

    @property
    def subscriber_count(self) -> int:
        return len(self._listeners)
