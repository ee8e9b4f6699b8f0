"""Ports (interfaces) for the ports-and-adapters architecture."""

from stop_trips.domain.ports.history_repository import HistoryRepository
from stop_trips.domain.ports.stop_repository import StopRepository
from stop_trips.domain.ports.stop_trips_repository import DayTripSet, StopTripsRepository

__all__ = [
    "DayTripSet",
    "HistoryRepository",
    "StopRepository",
    "StopTripsRepository",
]
