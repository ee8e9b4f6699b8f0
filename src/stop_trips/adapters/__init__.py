"""Adapters layer - configuration and data sources."""

from stop_trips.adapters.config import AppConfig
from stop_trips.adapters.memory import InMemoryHistoryRepository
from stop_trips.adapters.timetable import (
    TimetableLoader,
    TimetableStopRepository,
    TimetableStopTripsRepository,
)

__all__ = [
    "AppConfig",
    "InMemoryHistoryRepository",
    "TimetableLoader",
    "TimetableStopRepository",
    "TimetableStopTripsRepository",
]
