"""Domain models for stop trips."""

from stop_trips.domain.models.stop import STOP_TYPES, Stop, StopType
from stop_trips.domain.models.trip import StopTime, TripDetail
from stop_trips.domain.models.ui_state import StopTripsUiState

__all__ = [
    "STOP_TYPES",
    "Stop",
    "StopTime",
    "StopTripsUiState",
    "StopType",
    "TripDetail",
]
