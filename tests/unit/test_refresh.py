"""Unit tests for the live schedule coordinator."""

import asyncio
from datetime import date

import pytest

from festgrid.schemas.activity import Activity
from festgrid.schemas.film import FilmRecord
from festgrid.services.refresh import FETCH_ERROR_MESSAGE, RefreshCoordinator, RefreshState
from festgrid.stores.base import BaseDataStore, Collection
from festgrid.stores.changes import ChangeHub

DAY_ONE = date(2025, 9, 26)
DAY_TWO = date(2025, 9, 27)


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class FakeStore(BaseDataStore):
    """In-memory store with per-day gates to hold fetches open."""

    def __init__(self) -> None:
        self.activities: dict[date, list[Activity]] = {}
        self.films: list[FilmRecord] = []
        self.hub = ChangeHub()
        self.gates: dict[date, asyncio.Event] = {}
        self.error: Exception | None = None
        self.activity_calls: list[date] = []
        self.unsubscribe_calls = 0

    async def list_activities(self, date_equals, status="published", is_public=True):
        self.activity_calls.append(date_equals)
        gate = self.gates.get(date_equals)
        if gate is not None:
            await gate.wait()
        if self.error is not None:
            raise self.error
        return list(self.activities.get(date_equals, []))

    async def list_films(self, status="published", publication_status="public"):
        return list(self.films)

    def subscribe(self, collection, date_equals, callback):
        unsubscribe = self.hub.subscribe(collection, date_equals, callback)

        def counted() -> None:
            self.unsubscribe_calls += 1
            unsubscribe()

        return counted


def make_activity(id: str, event_date: date = DAY_ONE, start_time: str = "10:00") -> Activity:
    return Activity(
        id=id,
        name=f"Activity {id}",
        event_date=event_date,
        start_time=start_time,
        end_time="11:00",
        venue_name="market",
        status="published",
        is_public=True,
    )


def item_ids(coordinator: RefreshCoordinator) -> list[str]:
    return [item.id for item in coordinator.snapshot.items]


@pytest.fixture
def store() -> FakeStore:
    store = FakeStore()
    store.activities[DAY_ONE] = [make_activity("one")]
    store.activities[DAY_TWO] = [make_activity("two", DAY_TWO)]
    return store


# ---------------------------------------------------------------------------
# Date selection
# ---------------------------------------------------------------------------


class TestSetTargetDate:
    async def test_initial_state_is_idle(self, store: FakeStore) -> None:
        coordinator = RefreshCoordinator(store)

        assert coordinator.state is RefreshState.IDLE
        assert coordinator.target_date is None
        assert coordinator.snapshot.items == []
        assert not coordinator.snapshot.is_loading

    async def test_builds_schedule_for_date(self, store: FakeStore) -> None:
        coordinator = RefreshCoordinator(store)

        snapshot = await coordinator.set_target_date(DAY_ONE)

        assert snapshot.state is RefreshState.READY
        assert snapshot.target_date == DAY_ONE
        assert item_ids(coordinator) == ["one"]
        assert snapshot.error is None
        assert snapshot.last_updated is not None
        assert coordinator.subscription_count == 2

    async def test_reports_loading_before_ready(self, store: FakeStore) -> None:
        states: list[RefreshState] = []
        coordinator = RefreshCoordinator(store, on_update=lambda s: states.append(s.state))

        await coordinator.set_target_date(DAY_ONE)

        assert states[-2:] == [RefreshState.LOADING, RefreshState.READY]

    async def test_same_date_is_a_no_op(self, store: FakeStore) -> None:
        coordinator = RefreshCoordinator(store)

        await coordinator.set_target_date(DAY_ONE)
        await coordinator.set_target_date(DAY_ONE)

        assert store.activity_calls == [DAY_ONE]

    async def test_items_of_previous_day_are_cleared(self, store: FakeStore) -> None:
        coordinator = RefreshCoordinator(store)
        await coordinator.set_target_date(DAY_ONE)
        store.gates[DAY_TWO] = asyncio.Event()

        task = asyncio.create_task(coordinator.set_target_date(DAY_TWO))
        await asyncio.sleep(0)

        assert coordinator.state is RefreshState.LOADING
        assert coordinator.snapshot.is_loading
        assert coordinator.snapshot.items == []

        store.gates[DAY_TWO].set()
        await task
        assert item_ids(coordinator) == ["two"]

    async def test_slow_earlier_date_never_overwrites_newer_date(self, store: FakeStore) -> None:
        coordinator = RefreshCoordinator(store)
        store.gates[DAY_ONE] = asyncio.Event()

        first = asyncio.create_task(coordinator.set_target_date(DAY_ONE))
        await asyncio.sleep(0)
        await coordinator.set_target_date(DAY_TWO)

        assert coordinator.state is RefreshState.READY
        assert item_ids(coordinator) == ["two"]

        # The first fetch resolves last and must be discarded
        store.gates[DAY_ONE].set()
        await first

        assert coordinator.target_date == DAY_TWO
        assert coordinator.state is RefreshState.READY
        assert item_ids(coordinator) == ["two"]

    async def test_closed_coordinator_rejects_dates(self, store: FakeStore) -> None:
        coordinator = RefreshCoordinator(store)
        coordinator.close()

        with pytest.raises(RuntimeError):
            await coordinator.set_target_date(DAY_ONE)


# ---------------------------------------------------------------------------
# Failures and manual refresh
# ---------------------------------------------------------------------------


class TestFailures:
    async def test_failure_keeps_previous_items(self, store: FakeStore) -> None:
        coordinator = RefreshCoordinator(store)
        await coordinator.set_target_date(DAY_ONE)

        store.error = RuntimeError("database unavailable")
        snapshot = await coordinator.force_refresh()

        assert snapshot.state is RefreshState.ERROR
        assert snapshot.error == "database unavailable"
        assert item_ids(coordinator) == ["one"]

    async def test_failure_without_message_uses_generic_error(self, store: FakeStore) -> None:
        store.error = RuntimeError()
        coordinator = RefreshCoordinator(store)

        snapshot = await coordinator.set_target_date(DAY_ONE)

        assert snapshot.state is RefreshState.ERROR
        assert snapshot.error == FETCH_ERROR_MESSAGE
        assert snapshot.items == []

    async def test_manual_retry_recovers(self, store: FakeStore) -> None:
        store.error = RuntimeError("timeout")
        coordinator = RefreshCoordinator(store)
        await coordinator.set_target_date(DAY_ONE)

        store.error = None
        snapshot = await coordinator.force_refresh()

        assert snapshot.state is RefreshState.READY
        assert snapshot.error is None
        assert item_ids(coordinator) == ["one"]

    async def test_force_refresh_without_date_does_nothing(self, store: FakeStore) -> None:
        coordinator = RefreshCoordinator(store)

        snapshot = await coordinator.force_refresh()

        assert snapshot.state is RefreshState.IDLE
        assert store.activity_calls == []

    async def test_failing_update_listener_does_not_break_refresh(self, store: FakeStore) -> None:
        def broken_listener(snapshot) -> None:
            raise ValueError("listener bug")

        coordinator = RefreshCoordinator(store, on_update=broken_listener)

        snapshot = await coordinator.set_target_date(DAY_ONE)

        assert snapshot.state is RefreshState.READY


# ---------------------------------------------------------------------------
# Change notifications
# ---------------------------------------------------------------------------


class TestChangeNotifications:
    async def test_activity_change_rebuilds(self, store: FakeStore) -> None:
        coordinator = RefreshCoordinator(store)
        await coordinator.set_target_date(DAY_ONE)

        store.activities[DAY_ONE].append(make_activity("late-addition", start_time="12:00"))
        store.hub.publish(Collection.ACTIVITIES, DAY_ONE)
        await coordinator.wait_idle()

        assert item_ids(coordinator) == ["one", "late-addition"]

    async def test_film_change_rebuilds(self, store: FakeStore) -> None:
        coordinator = RefreshCoordinator(store)
        await coordinator.set_target_date(DAY_ONE)

        store.films.append(FilmRecord.from_document("film-1", {"title": "Monsoon"}))
        store.hub.publish(Collection.FILMS)
        await coordinator.wait_idle()

        assert item_ids(coordinator) == ["one", "film-1_screening_1"]

    async def test_change_for_other_day_is_ignored(self, store: FakeStore) -> None:
        coordinator = RefreshCoordinator(store)
        await coordinator.set_target_date(DAY_ONE)

        store.hub.publish(Collection.ACTIVITIES, DAY_TWO)
        await coordinator.wait_idle()

        assert store.activity_calls == [DAY_ONE]

    async def test_change_while_in_error_is_ignored(self, store: FakeStore) -> None:
        store.error = RuntimeError("down")
        coordinator = RefreshCoordinator(store)
        await coordinator.set_target_date(DAY_ONE)

        store.hub.publish(Collection.FILMS)
        await coordinator.wait_idle()

        assert coordinator.state is RefreshState.ERROR
        assert store.activity_calls == [DAY_ONE]

    async def test_change_from_another_thread(self, store: FakeStore) -> None:
        coordinator = RefreshCoordinator(store)
        await coordinator.set_target_date(DAY_ONE)

        store.activities[DAY_ONE].append(make_activity("from-thread", start_time="13:00"))
        await asyncio.to_thread(store.hub.publish, Collection.ACTIVITIES, DAY_ONE)
        await asyncio.sleep(0)
        await coordinator.wait_idle()

        assert item_ids(coordinator) == ["one", "from-thread"]

    async def test_old_date_listener_is_released(self, store: FakeStore) -> None:
        coordinator = RefreshCoordinator(store)
        await coordinator.set_target_date(DAY_ONE)
        await coordinator.set_target_date(DAY_TWO)

        store.hub.publish(Collection.ACTIVITIES, DAY_ONE)
        await coordinator.wait_idle()

        assert store.activity_calls == [DAY_ONE, DAY_TWO]


# ---------------------------------------------------------------------------
# Teardown
# ---------------------------------------------------------------------------


class TestClose:
    async def test_subscriptions_released_exactly_once(self, store: FakeStore) -> None:
        coordinator = RefreshCoordinator(store)
        await coordinator.set_target_date(DAY_ONE)
        await coordinator.set_target_date(DAY_TWO)

        coordinator.close()
        coordinator.close()

        # Two released on the date change, two on close
        assert store.unsubscribe_calls == 4
        assert store.hub.subscriber_count == 0
        assert coordinator.subscription_count == 0

    async def test_result_arriving_after_close_is_discarded(self, store: FakeStore) -> None:
        coordinator = RefreshCoordinator(store)
        store.gates[DAY_ONE] = asyncio.Event()

        task = asyncio.create_task(coordinator.set_target_date(DAY_ONE))
        await asyncio.sleep(0)
        coordinator.close()
        store.gates[DAY_ONE].set()
        await task

        assert coordinator.state is not RefreshState.READY
        assert coordinator.snapshot.items == []

    async def test_notifications_after_close_are_ignored(self, store: FakeStore) -> None:
        coordinator = RefreshCoordinator(store)
        await coordinator.set_target_date(DAY_ONE)
        coordinator.close()

        assert store.hub.publish(Collection.FILMS) == 0
        assert store.activity_calls == [DAY_ONE]
