"""In-memory history repository."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from stop_trips.domain.models import StopType
from stop_trips.state import StateStore

logger = logging.getLogger(__name__)

HistoryKey = tuple[bool, int, str]


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class AccessRecord:
    """How often and when a stop or line was last viewed."""

    count: int
    last_accessed_at: datetime


class InMemoryHistoryRepository:
    """Keeps favorites and view history for the lifetime of the process."""

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._favorites: dict[HistoryKey, StateStore[bool | None]] = {}
        self._accesses: dict[HistoryKey, AccessRecord] = {}

    def _favorite_store(self, key: HistoryKey) -> StateStore[bool | None]:
        store = self._favorites.get(key)
        if store is None:
            store = StateStore[bool | None](None)
            self._favorites[key] = store
        return store

    def is_favorite(self, is_line: bool, id: int, type: StopType) -> StateStore[bool | None]:
        return self._favorite_store((is_line, id, type))

    async def set_favorite(self, is_line: bool, id: int, type: StopType, is_favorite: bool) -> None:
        self._favorite_store((is_line, id, type)).set(is_favorite)
        logger.debug(f"Set favorite ({is_line}, {id}, {type}) to {is_favorite}")

    async def register_accessed(self, is_line: bool, id: int, type: StopType) -> None:
        key = (is_line, id, type)
        previous = self._accesses.get(key)
        count = 1 if previous is None else previous.count + 1
        self._accesses[key] = AccessRecord(count=count, last_accessed_at=self._clock())
        logger.debug(f"Registered access to ({is_line}, {id}, {type}), count {count}")

    def get_access(self, is_line: bool, id: int, type: StopType) -> AccessRecord | None:
        return self._accesses.get((is_line, id, type))

    def recently_accessed(self, limit: int = 10) -> list[HistoryKey]:
        """Keys sorted by most recent access first."""
        ordered = sorted(
            self._accesses.items(), key=lambda item: item[1].last_accessed_at, reverse=True
        )
        return [key for key, _ in ordered[:limit]]
