"""Tests for the static timetable data source."""

from datetime import datetime
from pathlib import Path

import pytest

from stop_trips.adapters.timetable import (
    TimetableLoader,
    TimetableStopRepository,
    TimetableStopTripsRepository,
)
from tests.fakes import ROME

TIMETABLE_TOML = """
[[stops]]
stop_id = 1
stop_type = "urban"
name = "Piazza Dante"
town = "Trento"

[[stops]]
stop_id = 2
stop_type = "urban"
name = "Via Brennero"

[[trips]]
trip_id = "early"
line = "3"
headsign = "Gardolo"
stop_times = [
    { stop_id = 1, stop_type = "urban", time = "07:30" },
    { stop_id = 2, stop_type = "urban", time = "07:38" },
]

[[trips]]
trip_id = "late"
line = "3"
headsign = "Piazza Dante"
delay_minutes = 5
stop_times = [
    { stop_id = 2, stop_type = "urban", time = "09:10" },
    { stop_id = 1, stop_type = "urban", time = "09:20" },
]

[[trips]]
trip_id = "middle"
line = "5"
headsign = "Gardolo"
stop_times = [
    { stop_id = 1, stop_type = "urban", time = "08:30" },
    { stop_id = 2, stop_type = "urban", time = "08:38" },
    { stop_id = 3, stop_type = "urban", time = "08:50" },
]
"""

REFERENCE = datetime(2026, 10, 18, 8, 0, tzinfo=ROME)


@pytest.fixture
def timetable_path(tmp_path: Path) -> Path:
    path = tmp_path / "timetable.toml"
    path.write_text(TIMETABLE_TOML, encoding="utf-8")
    return path


class TestTimetableLoader:
    """Tests for parsing timetable files."""

    def test_when_file_is_valid_then_stops_and_trips_are_loaded(self, timetable_path: Path) -> None:
        """Given a valid TOML timetable, when loading, then stops and trips are parsed."""
        timetable = TimetableLoader.load(timetable_path)

        assert [s.name for s in timetable.stops] == ["Piazza Dante", "Via Brennero"]
        assert [t.trip_id for t in timetable.trips] == ["early", "late", "middle"]
        assert timetable.trips[1].delay_minutes == 5
        assert timetable.trips[0].stop_times[0].time.hour == 7

    def test_when_file_is_missing_then_raises_file_not_found(self, tmp_path: Path) -> None:
        """Given no file, when loading, then FileNotFoundError is raised."""
        with pytest.raises(FileNotFoundError, match="Timetable file not found"):
            TimetableLoader.load(tmp_path / "missing.toml")

    def test_when_toml_is_malformed_then_raises_value_error(self, tmp_path: Path) -> None:
        """Given malformed TOML, when loading, then ValueError is raised."""
        path = tmp_path / "broken.toml"
        path.write_text("[[stops]\nstop_id = ", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid TOML"):
            TimetableLoader.load(path)

    def test_when_trip_has_no_stop_times_then_raises_value_error(self) -> None:
        """Given a trip without stop times, when validating, then ValueError is raised."""
        data = {"trips": [{"trip_id": "x", "line": "1", "headsign": "A", "stop_times": []}]}

        with pytest.raises(ValueError):
            TimetableLoader.from_data(data)

    def test_when_stop_type_is_unknown_then_raises_value_error(self) -> None:
        """Given an unknown stop type, when validating, then ValueError is raised."""
        data = {"stops": [{"stop_id": 1, "stop_type": "suburban", "name": "A"}]}

        with pytest.raises(ValueError):
            TimetableLoader.from_data(data)

    def test_when_trip_ids_repeat_then_raises_value_error(self) -> None:
        """Given duplicate trip ids, when validating, then ValueError is raised."""
        trip = {
            "trip_id": "dup",
            "line": "1",
            "headsign": "A",
            "stop_times": [{"stop_id": 1, "stop_type": "urban", "time": "10:00"}],
        }

        with pytest.raises(ValueError, match="Trip ids must be unique"):
            TimetableLoader.from_data({"trips": [trip, trip]})

    def test_when_trips_is_not_a_list_then_raises_value_error(self) -> None:
        """Given a non-list trips entry, when validating, then ValueError is raised."""
        with pytest.raises(ValueError, match="'trips' must be a list"):
            TimetableLoader.from_data({"trips": {"trip_id": "x"}})


class TestTimetableRepositories:
    """Tests for the repositories backed by a timetable."""

    @pytest.mark.asyncio
    async def test_when_stop_exists_then_it_is_returned(self, timetable_path: Path) -> None:
        """Given a known stop, when fetching it, then its metadata is returned."""
        repository = TimetableStopRepository(TimetableLoader.load(timetable_path))

        stop = await repository.get_stop(1, "urban")

        assert stop is not None
        assert stop.name == "Piazza Dante"
        assert stop.town == "Trento"
        assert await repository.get_stop(1, "extraurban") is None

    @pytest.mark.asyncio
    async def test_day_trips_are_upcoming_trips_ordered_by_time_at_stop(
        self, timetable_path: Path
    ) -> None:
        """Given trips before and after the reference time, when fetching, then only later ones."""
        repository = TimetableStopTripsRepository(TimetableLoader.load(timetable_path))

        day_trips = await repository.get_trips(1, "urban", REFERENCE)

        assert day_trips.trip_count == 2
        first = await day_trips.get_trip_at_index(0)
        second = await day_trips.get_trip_at_index(1)
        assert first is not None and first.trip_id == "middle"
        assert second is not None and second.trip_id == "late"

    @pytest.mark.asyncio
    async def test_trip_progress_is_computed_from_clock(self, timetable_path: Path) -> None:
        """Given a clock at 08:40, when materialising a trip, then passed stops are completed."""
        repository = TimetableStopTripsRepository(
            TimetableLoader.load(timetable_path),
            clock=lambda: datetime(2026, 10, 18, 8, 40, tzinfo=ROME),
        )
        day_trips = await repository.get_trips(1, "urban", REFERENCE)

        trip = await day_trips.get_trip_at_index(0)

        assert trip is not None
        assert trip.completed_stops == 2
        assert trip.is_complete is False
        assert trip.stop_times[0].stop_name == "Piazza Dante"
        # stop 3 is not part of the timetable stops
        assert trip.stop_times[2].stop_name == ""
        assert trip.stop_times[0].arrival_time == datetime(2026, 10, 18, 8, 30, tzinfo=ROME)
        assert trip.last_event_received_at is None

    @pytest.mark.asyncio
    async def test_when_reloading_then_progress_uses_current_time(
        self, timetable_path: Path
    ) -> None:
        """Given time passing after the set was built, when reloading, then progress advances."""
        now = [datetime(2026, 10, 18, 8, 0, tzinfo=ROME)]
        repository = TimetableStopTripsRepository(
            TimetableLoader.load(timetable_path), clock=lambda: now[0]
        )
        day_trips = await repository.get_trips(1, "urban", REFERENCE)
        cached = await day_trips.get_trip_at_index(0)
        assert cached is not None and cached.completed_stops == 0

        now[0] = datetime(2026, 10, 18, 9, 0, tzinfo=ROME)
        live = await day_trips.reload_trip(cached, 0, REFERENCE)

        assert live is not None
        assert live.trip_id == cached.trip_id
        assert live.is_complete is True
        assert live.last_event_received_at == now[0]

    @pytest.mark.asyncio
    async def test_delay_postpones_stop_completion(self, timetable_path: Path) -> None:
        """Given a delayed trip, when its scheduled time just passed, then it is not completed."""
        repository = TimetableStopTripsRepository(
            TimetableLoader.load(timetable_path),
            clock=lambda: datetime(2026, 10, 18, 9, 12, tzinfo=ROME),
        )
        day_trips = await repository.get_trips(1, "urban", REFERENCE)

        trip = await day_trips.get_trip_at_index(1)

        assert trip is not None
        assert trip.trip_id == "late"
        # 09:10 + 5 minutes delay is still ahead
        assert trip.completed_stops == 0

    @pytest.mark.asyncio
    async def test_when_reloading_other_trip_then_returns_none(self, timetable_path: Path) -> None:
        """Given a trip that is not at the index, when reloading, then nothing is returned."""
        repository = TimetableStopTripsRepository(TimetableLoader.load(timetable_path))
        day_trips = await repository.get_trips(1, "urban", REFERENCE)
        trip = await day_trips.get_trip_at_index(0)
        assert trip is not None

        assert await day_trips.reload_trip(trip, 1, REFERENCE) is None
        assert await day_trips.reload_trip(trip, 5, REFERENCE) is None

    @pytest.mark.asyncio
    async def test_when_index_out_of_range_then_raises(self, timetable_path: Path) -> None:
        """Given an index past the end, when fetching, then IndexError is raised."""
        repository = TimetableStopTripsRepository(TimetableLoader.load(timetable_path))
        day_trips = await repository.get_trips(1, "urban", REFERENCE)

        with pytest.raises(IndexError):
            await day_trips.get_trip_at_index(2)
