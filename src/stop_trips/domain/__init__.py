"""Domain layer - core models and ports."""

from stop_trips.domain.models import Stop, StopTime, StopTripsUiState, TripDetail
from stop_trips.domain.ports import (
    DayTripSet,
    HistoryRepository,
    StopRepository,
    StopTripsRepository,
)

__all__ = [
    "DayTripSet",
    "HistoryRepository",
    "Stop",
    "StopRepository",
    "StopTime",
    "StopTripsRepository",
    "StopTripsUiState",
    "TripDetail",
]
