"""Task kinds used by the controller.

Two distinct kinds are modelled: a one-shot task that runs once and is never
preempted, and a single-slot navigation task where each launch preempts the
previous one. A plain set of fire-and-forget tasks covers everything else.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


async def _wait_for(tasks: list[asyncio.Task[Any]]) -> None:
    pending = [task for task in tasks if not task.done()]
    if pending:
        await asyncio.wait(pending)


async def _cancel_and_wait(tasks: list[asyncio.Task[Any]]) -> None:
    for task in tasks:
        task.cancel()
    for task in tasks:
        with contextlib.suppress(asyncio.CancelledError):
            await task


class OneShotTask:
    """Runs a coroutine exactly once per owner lifetime."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._task: asyncio.Task[None] | None = None

    @property
    def started(self) -> bool:
        return self._task is not None

    def start(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task[None] | None:
        if self._task is not None:
            logger.warning(f"One-shot task '{self.name}' already started, ignoring")
            coro.close()
            return None
        self._task = asyncio.create_task(coro, name=self.name)
        return self._task

    def is_pending(self) -> bool:
        return self._task is not None and not self._task.done()

    async def wait(self) -> None:
        if self._task is not None:
            await _wait_for([self._task])

    async def cancel(self) -> None:
        if self._task is not None:
            await _cancel_and_wait([self._task])


@dataclass(frozen=True)
class NavigationTicket:
    """Identifies one launch of the navigation slot."""

    generation: int


class NavigationSlot:
    """Single-slot holder for the current navigation task.

    Launching a new task cancels the occupying one first and bumps the
    generation, so at most one navigation task is ever in flight and results
    from older generations can be recognised and dropped.
    """

    def __init__(self) -> None:
        self._task: asyncio.Task[None] | None = None
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def launch(
        self, factory: Callable[[NavigationTicket], Coroutine[Any, Any, None]]
    ) -> asyncio.Task[None]:
        if self._task is not None and not self._task.done():
            logger.debug(f"Cancelling navigation task of generation {self._generation}")
            self._task.cancel()
        self._generation += 1
        ticket = NavigationTicket(self._generation)
        self._task = asyncio.create_task(
            factory(ticket), name=f"navigation-{ticket.generation}"
        )
        return self._task

    def is_current(self, ticket: NavigationTicket) -> bool:
        return ticket.generation == self._generation

    def is_pending(self) -> bool:
        return self._task is not None and not self._task.done()

    async def wait(self) -> None:
        """Wait until the slot is idle, following any task launched meanwhile."""
        while self._task is not None and not self._task.done():
            await _wait_for([self._task])

    async def cancel(self) -> None:
        if self._task is not None:
            await _cancel_and_wait([self._task])


class BackgroundTasks:
    """Fire-and-forget tasks, referenced until they complete."""

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[None]] = set()

    def spawn(self, coro: Coroutine[Any, Any, None], name: str | None = None) -> asyncio.Task[None]:
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def __len__(self) -> int:
        return len(self._tasks)

    def is_pending(self) -> bool:
        return any(not task.done() for task in self._tasks)

    async def wait(self) -> None:
        while any(not task.done() for task in self._tasks):
            await _wait_for(list(self._tasks))

    async def cancel(self) -> None:
        await _cancel_and_wait(list(self._tasks))
