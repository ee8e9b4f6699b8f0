"""Shared fixtures."""

from __future__ import annotations

import pytest

from stop_trips.adapters.memory import InMemoryHistoryRepository
from stop_trips.application import StopTripsController
from stop_trips.domain.models import Stop, TripDetail
from tests.fakes import (
    NOW,
    ROME,
    FakeDayTripSet,
    FakeStopRepository,
    FakeStopTripsRepository,
    make_trip,
)


@pytest.fixture
def stop() -> Stop:
    return Stop(stop_id=1, stop_type="urban", name="Piazza Dante", town="Trento")


@pytest.fixture
def trips() -> list[TripDetail]:
    return [make_trip("trip-0"), make_trip("trip-1"), make_trip("trip-2")]


@pytest.fixture
def day_trips(trips: list[TripDetail]) -> FakeDayTripSet:
    return FakeDayTripSet(trips)


@pytest.fixture
def trips_repository(day_trips: FakeDayTripSet) -> FakeStopTripsRepository:
    return FakeStopTripsRepository(day_trips)


@pytest.fixture
def stop_repository(stop: Stop) -> FakeStopRepository:
    return FakeStopRepository(stop)


@pytest.fixture
def history_repository() -> InMemoryHistoryRepository:
    return InMemoryHistoryRepository(clock=lambda: NOW)


@pytest.fixture
def controller(
    stop_repository: FakeStopRepository,
    trips_repository: FakeStopTripsRepository,
    history_repository: InMemoryHistoryRepository,
) -> StopTripsController:
    return StopTripsController(
        1,
        "urban",
        stop_repository,
        trips_repository,
        history_repository,
        zone=ROME,
        clock=lambda: NOW,
    )
