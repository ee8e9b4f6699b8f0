"""Stop repository port."""

from typing import Protocol

from stop_trips.domain.models.stop import Stop, StopType


class StopRepository(Protocol):
    """Port for retrieving static stop metadata."""

    async def get_stop(self, stop_id: int, stop_type: StopType) -> Stop | None:
        """Get a stop by its identifier and type, or None if unknown."""
        ...
