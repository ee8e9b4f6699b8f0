"""Favorite toggle for the viewed stop."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stop_trips.domain.contracts import ObservableValue
    from stop_trips.domain.models import StopType
    from stop_trips.domain.ports import HistoryRepository

logger = logging.getLogger(__name__)


class FavoriteToggle:
    """Flips the favorite flag of a stop (read, negate, write)."""

    def __init__(
        self,
        stop_id: int,
        stop_type: StopType,
        history_repository: HistoryRepository,
    ) -> None:
        self.stop_id = stop_id
        self.stop_type = stop_type
        self._history_repository = history_repository
        self.is_favorite: ObservableValue[bool | None] = history_repository.is_favorite(
            False, stop_id, stop_type
        )

    async def toggle(self) -> None:
        current = self.is_favorite.value
        # an unknown flag means the stop was never marked
        new_value = True if current is None else not current
        try:
            await self._history_repository.set_favorite(
                False, self.stop_id, self.stop_type, new_value
            )
            logger.info(f"Stop ({self.stop_id}, {self.stop_type}) favorite set to {new_value}")
        except Exception as e:
            logger.error(
                f"Could not set favorite for stop ({self.stop_id}, {self.stop_type}): {e}",
                exc_info=True,
            )
