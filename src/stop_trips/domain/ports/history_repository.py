"""History repository port."""

from typing import Protocol

from stop_trips.domain.contracts.observable import ObservableValue
from stop_trips.domain.models.stop import StopType


class HistoryRepository(Protocol):
    """Port for favorites and recently viewed stops and lines."""

    def is_favorite(self, is_line: bool, id: int, type: StopType) -> ObservableValue[bool | None]:
        """Observe the favorite flag, None while unknown."""
        ...

    async def set_favorite(self, is_line: bool, id: int, type: StopType, is_favorite: bool) -> None:
        """Persist the favorite flag."""
        ...

    async def register_accessed(self, is_line: bool, id: int, type: StopType) -> None:
        """Record that the stop or line has just been viewed."""
        ...
