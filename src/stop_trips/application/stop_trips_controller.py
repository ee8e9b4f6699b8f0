"""Controller for browsing the trips of the day at a stop.

State machine behind the stop trips screen. It decides when to fetch, which
results to discard and how to merge them into the observable UI state, while
the repositories decide how trips are actually fetched.

Work runs on three independent tracks:

- the stop loader, started once and never preempted by navigation;
- the navigation slot, shared by every command that changes which trip is
  shown (reference time, reload, previous, next); each launch cancels the
  task currently in flight;
- fire-and-forget background tasks (favorite toggle).
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import replace
from datetime import UTC, datetime, tzinfo
from typing import TYPE_CHECKING

from stop_trips.application.favorite_toggle import FavoriteToggle
from stop_trips.application.stop_loader import StopLoader
from stop_trips.application.tasks import (
    BackgroundTasks,
    NavigationSlot,
    NavigationTicket,
    OneShotTask,
)
from stop_trips.domain.models import StopTripsUiState, TripDetail
from stop_trips.state import StateStore

if TYPE_CHECKING:
    from stop_trips.domain.contracts import ObservableValue
    from stop_trips.domain.models import StopType
    from stop_trips.domain.ports import (
        DayTripSet,
        HistoryRepository,
        StopRepository,
        StopTripsRepository,
    )

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class StopTripsController:
    """Owns the UI state and the day trip set of one stop screen."""

    def __init__(
        self,
        stop_id: int,
        stop_type: StopType,
        stop_repository: StopRepository,
        trips_repository: StopTripsRepository,
        history_repository: HistoryRepository,
        *,
        zone: tzinfo,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize the controller.

        Args:
            stop_id: Identifier of the viewed stop.
            stop_type: Type of the viewed stop.
            stop_repository: Source of static stop metadata.
            trips_repository: Source of the day trip sets.
            history_repository: Favorites and recently viewed stops.
            zone: Working time zone every reference date/time is normalized to.
            clock: Returns the current time, used for the initial reference.
        """
        self.stop_id = stop_id
        self.stop_type = stop_type
        self._trips_repository = trips_repository
        self._zone = zone
        self._clock = clock

        self._state = StateStore(StopTripsUiState.initial(self._normalize(clock())))
        # exclusively owned, replaced whenever the reference date/time changes
        self._day_trips: DayTripSet | None = None

        self._stop_loader = StopLoader(
            stop_id, stop_type, stop_repository, history_repository, self._state
        )
        self._favorite_toggle = FavoriteToggle(stop_id, stop_type, history_repository)

        self._stop_task = OneShotTask(f"load-stop-{stop_type}-{stop_id}")
        self._navigation = NavigationSlot()
        self._background = BackgroundTasks()

    @property
    def ui_state(self) -> ObservableValue[StopTripsUiState]:
        return self._state

    @property
    def is_favorite(self) -> ObservableValue[bool | None]:
        return self._favorite_toggle.is_favorite

    @property
    def trip_count(self) -> int | None:
        """Number of trips in the active day trip set, None if it is unknown."""
        if self._day_trips is None:
            return None
        return self._count_trips(self._day_trips)

    def start(self) -> None:
        """Load the stop and the trips around the current time."""
        self._stop_task.start(self._stop_loader.load())
        self.set_reference_date_time(self._clock())

    async def stop(self) -> None:
        """Cancel every pending task."""
        await self._navigation.cancel()
        await self._stop_task.cancel()
        await self._background.cancel()
        logger.info(f"Stopped controller for stop ({self.stop_id}, {self.stop_type})")

    async def wait_until_settled(self) -> None:
        """Wait until no task is pending on any track."""
        while (
            self._stop_task.is_pending()
            or self._navigation.is_pending()
            or self._background.is_pending()
        ):
            await self._stop_task.wait()
            await self._navigation.wait()
            await self._background.wait()

    # Commands

    def set_reference_date_time(self, reference_date_time: datetime) -> None:
        self._launch(
            "set reference date/time",
            lambda ticket: self._set_reference_date_time_async(ticket, reference_date_time),
        )

    def reload(self) -> None:
        self._launch("reload", self._reload_async)

    # While the day trip set is still being fetched there is no index to move
    # to: the click cancels the fetch and leaves the loading state until the
    # next reference date/time change or reload.
    def prev_clicked(self) -> None:
        self._launch(
            "previous trip",
            lambda ticket: self._load_index(ticket, self._state.value.trip_index - 1, True),
        )

    def next_clicked(self) -> None:
        self._launch(
            "next trip",
            lambda ticket: self._load_index(ticket, self._state.value.trip_index + 1, True),
        )

    def favorite_clicked(self) -> None:
        self._background.spawn(self._favorite_toggle.toggle(), name="toggle-favorite")

    # Navigation operations

    def _launch(
        self, action: str, operation: Callable[[NavigationTicket], Awaitable[None]]
    ) -> None:
        async def run(ticket: NavigationTicket) -> None:
            try:
                await operation(ticket)
            except asyncio.CancelledError:
                logger.debug(f"Navigation '{action}' (generation {ticket.generation}) cancelled")
                raise

        self._navigation.launch(run)

    def _commit(
        self,
        ticket: NavigationTicket,
        fn: Callable[[StopTripsUiState], StopTripsUiState],
    ) -> bool:
        """Apply `fn` to the state unless a newer navigation task has started."""
        if not self._navigation.is_current(ticket):
            logger.debug(f"Dropping state update of superseded generation {ticket.generation}")
            return False
        self._state.update(fn)
        return True

    def _normalize(self, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=self._zone)
        return value.astimezone(self._zone)

    async def _set_reference_date_time_async(
        self, ticket: NavigationTicket, reference_date_time: datetime
    ) -> None:
        reference = self._normalize(reference_date_time)
        self._day_trips = None
        self._commit(
            ticket,
            lambda s: replace(
                s,
                trip_index=0,
                trip=None,
                prev_enabled=False,
                next_enabled=False,
                reference_date_time=reference,
                loading=True,
                error=False,
            ),
        )

        try:
            day_trips = await self._trips_repository.get_trips(
                self.stop_id, self.stop_type, reference
            )
            if day_trips is None:
                logger.error(
                    f"No trips returned for stop ({self.stop_id}, {self.stop_type}) "
                    f"at time {reference.isoformat()}"
                )
        except Exception as e:
            logger.error(
                f"Could not load trips for stop ({self.stop_id}, {self.stop_type}) "
                f"at time {reference.isoformat()}: {e}",
                exc_info=True,
            )
            day_trips = None

        if not self._navigation.is_current(ticket):
            return
        self._day_trips = day_trips
        if day_trips is None:
            # no valid index to fall back to
            self._commit(ticket, lambda s: replace(s, loading=False, error=True))
        else:
            # the first trip was just fetched, so there is nothing to refresh
            await self._load_index(ticket, 0, requested_by_user=False)

    async def _reload_async(self, ticket: NavigationTicket) -> None:
        state = self._state.value
        previous_trip = state.trip
        if previous_trip is None:
            # nothing narrower to refresh, retry the whole day
            await self._set_reference_date_time_async(ticket, state.reference_date_time)
            return

        self._commit(ticket, lambda s: replace(s, loading=True, error=False))
        trip = await self._fetch_reloaded_trip(previous_trip, state)

        if trip is None:
            # keep the previous trip: stale data is better than none
            self._commit(ticket, lambda s: replace(s, loading=False, error=True))
        else:
            self._commit(ticket, lambda s: replace(s, trip=trip, loading=False, error=False))

    async def _fetch_reloaded_trip(
        self, previous_trip: TripDetail, state: StopTripsUiState
    ) -> TripDetail | None:
        day_trips = self._day_trips
        if day_trips is None:
            logger.error(f"Cannot reload trip {previous_trip.trip_id}: no day trip set loaded")
            return None
        try:
            return await day_trips.reload_trip(
                previous_trip, state.trip_index, state.reference_date_time
            )
        except Exception as e:
            logger.error(
                f"Could not reload trip {previous_trip.trip_id} at index {state.trip_index} "
                f"for stop ({self.stop_id}, {self.stop_type}): {e}",
                exc_info=True,
            )
            return None

    def _count_trips(self, day_trips: DayTripSet, index: int | None = None) -> int | None:
        try:
            return day_trips.trip_count
        except Exception as e:
            at_index = "" if index is None else f" at index {index}"
            logger.error(
                f"Could not count trips{at_index} "
                f"for stop ({self.stop_id}, {self.stop_type}): {e}",
                exc_info=True,
            )
            return None

    async def _load_index(
        self, ticket: NavigationTicket, index: int, requested_by_user: bool
    ) -> None:
        day_trips = self._day_trips
        if day_trips is None:
            if not requested_by_user:
                self._commit(ticket, lambda s: replace(s, loading=False, error=False))
            return

        trip_count = self._count_trips(day_trips, index)
        if trip_count is None:
            self._commit(ticket, lambda s: replace(s, loading=False, error=True))
            return
        if not 0 <= index < trip_count:
            if not requested_by_user:
                # settles the state after e.g. a day without trips
                self._commit(ticket, lambda s: replace(s, loading=False, error=False))
            return

        self._commit(
            ticket,
            lambda s: replace(
                s,
                trip_index=index,
                trip=None,
                prev_enabled=index > 0,
                next_enabled=index < trip_count - 1,
                loading=True,
                error=False,
            ),
        )

        try:
            trip = await day_trips.get_trip_at_index(index)
        except Exception as e:
            logger.error(
                f"Could not load trip at index {index} "
                f"for stop ({self.stop_id}, {self.stop_type}): {e}",
                exc_info=True,
            )
            trip = None

        if not self._commit(
            ticket, lambda s: replace(s, trip=trip, loading=False, error=trip is None)
        ):
            return

        if requested_by_user and trip is not None and not trip.is_complete:
            # show the cached trip fast, then replace it with live data
            await self._reload_async(ticket)
