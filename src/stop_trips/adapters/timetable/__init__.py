"""Static timetable data source."""

from stop_trips.adapters.timetable.timetable import (
    Timetable,
    TimetableStop,
    TimetableStopTime,
    TimetableTrip,
)
from stop_trips.adapters.timetable.timetable_loader import TimetableLoader
from stop_trips.adapters.timetable.timetable_repository import (
    TimetableDayTripSet,
    TimetableStopRepository,
    TimetableStopTripsRepository,
)

__all__ = [
    "Timetable",
    "TimetableDayTripSet",
    "TimetableLoader",
    "TimetableStop",
    "TimetableStopRepository",
    "TimetableStopTime",
    "TimetableStopTripsRepository",
    "TimetableTrip",
]
