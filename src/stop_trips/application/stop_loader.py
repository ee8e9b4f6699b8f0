"""Loader for the static metadata of the viewed stop."""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stop_trips.domain.models import Stop, StopTripsUiState, StopType
    from stop_trips.domain.ports import HistoryRepository, StopRepository
    from stop_trips.state import StateStore

logger = logging.getLogger(__name__)


class StopLoader:
    """Fetches the stop once and records that it was viewed.

    Stop metadata and trip data fail independently: a failure here leaves
    `stop` unset but never raises the `error` flag of the trip UI.
    """

    def __init__(
        self,
        stop_id: int,
        stop_type: StopType,
        stop_repository: StopRepository,
        history_repository: HistoryRepository,
        state: StateStore[StopTripsUiState],
    ) -> None:
        self.stop_id = stop_id
        self.stop_type = stop_type
        self._stop_repository = stop_repository
        self._history_repository = history_repository
        self._state = state

    async def load(self) -> None:
        stop = await self._fetch_stop()
        self._state.update(lambda s: dataclasses.replace(s, stop=stop))

    async def _fetch_stop(self) -> Stop | None:
        try:
            stop = await self._stop_repository.get_stop(self.stop_id, self.stop_type)
            if stop is None:
                logger.error(f"Stop ({self.stop_id}, {self.stop_type}) not found")
            # loading happens once per screen, so this counts as one view
            await self._history_repository.register_accessed(False, self.stop_id, self.stop_type)
            return stop
        except Exception as e:
            logger.error(
                f"Could not load stop ({self.stop_id}, {self.stop_type}): {e}", exc_info=True
            )
            return None
