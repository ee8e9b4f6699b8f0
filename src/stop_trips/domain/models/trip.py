"""Trip domain models."""

from dataclasses import dataclass, field
from datetime import datetime

from stop_trips.domain.models.stop import StopType


@dataclass(frozen=True)
class StopTime:
    """A single stop served by a trip, with its scheduled times."""

    stop_id: int
    stop_type: StopType
    stop_name: str
    arrival_time: datetime | None
    departure_time: datetime | None


@dataclass(frozen=True)
class TripDetail:
    """One scheduled vehicle run as seen from a stop."""

    trip_id: str
    line: str
    headsign: str
    completed_stops: int  # stops already passed by the vehicle
    stop_times: tuple[StopTime, ...] = field(default_factory=tuple)
    delay_minutes: int | None = None
    last_event_received_at: datetime | None = None

    @property
    def is_complete(self) -> bool:
        """Whether the vehicle has already passed every stop of the trip."""
        return self.completed_stops >= len(self.stop_times)
