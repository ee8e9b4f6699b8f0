"""Static timetable model parsed from TOML."""

from datetime import time as time_of_day

from pydantic import BaseModel, ConfigDict, Field, model_validator

from stop_trips.domain.models.stop import StopType


class TimetableStop(BaseModel):
    """A stop of the static timetable."""

    model_config = ConfigDict(frozen=True)

    stop_id: int
    stop_type: StopType
    name: str
    street: str | None = None
    town: str | None = None
    latitude: float | None = None
    longitude: float | None = None


class TimetableStopTime(BaseModel):
    """Scheduled passage of a trip at a stop, as time of day."""

    model_config = ConfigDict(frozen=True)

    stop_id: int
    stop_type: StopType
    time: time_of_day


class TimetableTrip(BaseModel):
    """A scheduled trip running every day."""

    model_config = ConfigDict(frozen=True)

    trip_id: str
    line: str
    headsign: str
    delay_minutes: int | None = None
    stop_times: list[TimetableStopTime] = Field(min_length=1)

    def time_at(self, stop_id: int, stop_type: StopType) -> time_of_day | None:
        for stop_time in self.stop_times:
            if stop_time.stop_id == stop_id and stop_time.stop_type == stop_type:
                return stop_time.time
        return None


class Timetable(BaseModel):
    """All stops and trips of the static data source."""

    model_config = ConfigDict(frozen=True)

    stops: list[TimetableStop] = Field(default_factory=list)
    trips: list[TimetableTrip] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique_trip_ids(self) -> "Timetable":
        trip_ids = [trip.trip_id for trip in self.trips]
        if len(trip_ids) != len(set(trip_ids)):
            duplicates = {t for t in trip_ids if trip_ids.count(t) > 1}
            raise ValueError(f"Trip ids must be unique. Duplicate ids found: {duplicates}")
        return self

    def find_stop(self, stop_id: int, stop_type: StopType) -> TimetableStop | None:
        for stop in self.stops:
            if stop.stop_id == stop_id and stop.stop_type == stop_type:
                return stop
        return None
