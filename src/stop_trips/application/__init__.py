"""Application layer - use cases orchestrating the domain."""

from stop_trips.application.favorite_toggle import FavoriteToggle
from stop_trips.application.stop_loader import StopLoader
from stop_trips.application.stop_trips_controller import StopTripsController
from stop_trips.application.tasks import (
    BackgroundTasks,
    NavigationSlot,
    NavigationTicket,
    OneShotTask,
)

__all__ = [
    "BackgroundTasks",
    "FavoriteToggle",
    "NavigationSlot",
    "NavigationTicket",
    "OneShotTask",
    "StopLoader",
    "StopTripsController",
]
