"""Stop trips repository port."""

from datetime import datetime
from typing import Protocol

from stop_trips.domain.models.stop import StopType
from stop_trips.domain.models.trip import TripDetail


class DayTripSet(Protocol):
    """The ordered trips serving a stop on the day of one reference date/time."""

    @property
    def trip_count(self) -> int:
        """Number of trips in the set."""
        ...

    async def get_trip_at_index(self, index: int) -> TripDetail | None:
        """Get the (possibly cached) trip at `index`."""
        ...

    async def reload_trip(
        self, trip: TripDetail, index: int, reference_date_time: datetime
    ) -> TripDetail | None:
        """Fetch live data for `trip`, currently shown at `index`."""
        ...


class StopTripsRepository(Protocol):
    """Port for retrieving the trips serving a stop."""

    async def get_trips(
        self, stop_id: int, stop_type: StopType, reference_date_time: datetime
    ) -> DayTripSet | None:
        """Get the trips serving a stop on the day of `reference_date_time`."""
        ...
