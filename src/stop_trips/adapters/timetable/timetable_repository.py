"""Stop and trip repositories backed by a static timetable."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime, time, timedelta

from stop_trips.adapters.timetable.timetable import Timetable, TimetableTrip
from stop_trips.domain.models import Stop, StopTime, StopType, TripDetail

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TimetableStopRepository:
    """Stop repository reading stops from the timetable."""

    def __init__(self, timetable: Timetable) -> None:
        self._timetable = timetable

    async def get_stop(self, stop_id: int, stop_type: StopType) -> Stop | None:
        stop = self._timetable.find_stop(stop_id, stop_type)
        if stop is None:
            return None
        return Stop(
            stop_id=stop.stop_id,
            stop_type=stop.stop_type,
            name=stop.name,
            street=stop.street,
            town=stop.town,
            latitude=stop.latitude,
            longitude=stop.longitude,
        )


class TimetableDayTripSet:
    """Trips serving one stop on the day of a reference date/time.

    Trips returned by `get_trip_at_index` reflect the progress at the moment
    the set was built; `reload_trip` recomputes it with the current time.
    """

    def __init__(
        self,
        timetable: Timetable,
        trips: list[TimetableTrip],
        reference_date_time: datetime,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._timetable = timetable
        self._trips = trips
        self.reference_date_time = reference_date_time
        self._clock = clock
        self._built_at = clock()

    @property
    def trip_count(self) -> int:
        return len(self._trips)

    async def get_trip_at_index(self, index: int) -> TripDetail | None:
        if not 0 <= index < len(self._trips):
            raise IndexError(f"Trip index {index} out of range (count: {len(self._trips)})")
        return self._materialize(self._trips[index], self._built_at, received_at=None)

    async def reload_trip(
        self, trip: TripDetail, index: int, reference_date_time: datetime
    ) -> TripDetail | None:
        if not 0 <= index < len(self._trips) or self._trips[index].trip_id != trip.trip_id:
            logger.warning(f"Trip {trip.trip_id} is no longer at index {index}")
            return None
        now = self._clock()
        return self._materialize(self._trips[index], now, received_at=now)

    def _materialize(
        self, trip: TimetableTrip, now: datetime, received_at: datetime | None
    ) -> TripDetail:
        zone = self.reference_date_time.tzinfo
        day = self.reference_date_time.date()
        delay = timedelta(minutes=trip.delay_minutes or 0)

        stop_times: list[StopTime] = []
        completed_stops = 0
        for entry in trip.stop_times:
            scheduled = datetime.combine(day, entry.time, tzinfo=zone)
            stop = self._timetable.find_stop(entry.stop_id, entry.stop_type)
            stop_times.append(
                StopTime(
                    stop_id=entry.stop_id,
                    stop_type=entry.stop_type,
                    stop_name=stop.name if stop is not None else "",
                    arrival_time=scheduled,
                    departure_time=scheduled,
                )
            )
            if scheduled + delay <= now:
                completed_stops += 1

        return TripDetail(
            trip_id=trip.trip_id,
            line=trip.line,
            headsign=trip.headsign,
            completed_stops=completed_stops,
            stop_times=tuple(stop_times),
            delay_minutes=trip.delay_minutes,
            last_event_received_at=received_at,
        )


class TimetableStopTripsRepository:
    """Stop trips repository reading trips from the timetable."""

    def __init__(self, timetable: Timetable, clock: Callable[[], datetime] = _utcnow) -> None:
        self._timetable = timetable
        self._clock = clock

    async def get_trips(
        self, stop_id: int, stop_type: StopType, reference_date_time: datetime
    ) -> TimetableDayTripSet:
        """Get trips passing at the stop from the reference time of day onwards."""
        reference_time = reference_date_time.time()
        serving: list[tuple[time, TimetableTrip]] = []
        for trip in self._timetable.trips:
            time_at_stop = trip.time_at(stop_id, stop_type)
            if time_at_stop is not None and time_at_stop >= reference_time:
                serving.append((time_at_stop, trip))
        serving.sort(key=lambda item: item[0])

        logger.debug(
            f"Found {len(serving)} trip(s) for stop ({stop_id}, {stop_type}) "
            f"after {reference_date_time.isoformat()}"
        )
        return TimetableDayTripSet(
            self._timetable,
            [trip for _, trip in serving],
            reference_date_time,
            clock=self._clock,
        )
