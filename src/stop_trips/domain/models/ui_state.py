"""UI-observable state of the stop trips screen."""

from dataclasses import dataclass
from datetime import datetime

from stop_trips.domain.models.stop import Stop
from stop_trips.domain.models.trip import TripDetail


@dataclass(frozen=True)
class StopTripsUiState:
    """Immutable snapshot, replaced wholesale on every update.

    `prev_enabled` and `next_enabled` are always derived from `trip_index` and
    the trip count of the active day trip set at the moment the index changes.
    """

    stop: Stop | None
    trip_index: int
    trip: TripDetail | None
    prev_enabled: bool
    next_enabled: bool
    reference_date_time: datetime
    loading: bool
    error: bool

    @classmethod
    def initial(cls, reference_date_time: datetime) -> "StopTripsUiState":
        """Create the state shown before anything has been loaded."""
        return cls(
            stop=None,
            trip_index=0,
            trip=None,
            prev_enabled=False,
            next_enabled=False,
            reference_date_time=reference_date_time,
            loading=True,
            error=False,
        )
