"""Live schedule for a selected date, kept current under upstream changes."""

import asyncio
import logging
from collections.abc import Callable
from datetime import date, datetime, timezone
from typing import Any

from festgrid.schemas.schedule import RefreshState, ScheduleSnapshot
from festgrid.services.options import ScheduleOptions
from festgrid.services.unifier import build_schedule
from festgrid.stores.base import BaseDataStore, Collection, Unsubscribe

logger = logging.getLogger(__name__)

__all__ = ["RefreshCoordinator", "RefreshState"]

FETCH_ERROR_MESSAGE = "Failed to fetch schedule data"


class RefreshCoordinator:
    """
    Owns the schedule shown for one selected date.

    State machine: IDLE → LOADING → READY, or LOADING → ERROR.

    - Changing the target date re-subscribes to both collections for the new
      day and rebuilds.
    - An upstream change notification while LOADING or READY triggers a full
      rebuild; there is no incremental patching.
    - Every rebuild takes a new generation number. A fetch that resolves after
      a newer rebuild started is discarded, so a slow request for an old date
      can never overwrite a newer result. Superseded fetches are not aborted.
    - A failed fetch moves to ERROR but keeps the previous items visible.
    """

    def __init__(
        self,
        store: BaseDataStore,
        options: ScheduleOptions | None = None,
        on_update: Callable[[ScheduleSnapshot], None] | None = None,
    ) -> None:
        """
        Initialize the coordinator.

        Args:
            store: Source of activities, films and change notifications
            options: Build options passed to every rebuild
            on_update: Called with the new snapshot after every state change
        """
        self.store = store
        self.options = options or ScheduleOptions()
        self.on_update = on_update

        self._snapshot = ScheduleSnapshot()
        self._generation = 0
        self._unsubscribers: list[Unsubscribe] = []
        self._pending: set[asyncio.Task[None]] = set()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._closed = False

    @property
    def snapshot(self) -> ScheduleSnapshot:
        return self._snapshot

    @property
    def target_date(self) -> date | None:
        return self._snapshot.target_date

    @property
    def state(self) -> RefreshState:
        return self._snapshot.state

    @property
    def subscription_count(self) -> int:
        return len(self._unsubscribers)

    async def set_target_date(self, target_date: date) -> ScheduleSnapshot:
        """
        Switch the live schedule to ``target_date`` and rebuild it.

        Selecting the date that is already active is a no-op; use
        force_refresh to rebuild it.
        """
        if self._closed:
            raise RuntimeError("RefreshCoordinator is closed")

        if target_date == self._snapshot.target_date and self._snapshot.state is not RefreshState.IDLE:
            return self._snapshot

        self._loop = asyncio.get_running_loop()
        self._release_subscriptions()
        logger.info(f"Schedule target date changed to {target_date}")

        # Items of the previous day are never shown under the new date
        self._update(target_date=target_date, items=[], error=None, last_updated=None)
        self._subscribe(target_date)

        await self._refresh("date change")
        return self._snapshot

    async def force_refresh(self) -> ScheduleSnapshot:
        """Rebuild the schedule for the current date (manual retry)."""
        if self._closed:
            raise RuntimeError("RefreshCoordinator is closed")
        if self._snapshot.target_date is None:
            logger.warning("Refresh requested before a target date was set")
            return self._snapshot

        await self._refresh("manual refresh")
        return self._snapshot

    async def wait_idle(self) -> None:
        """Wait for rebuilds triggered by change notifications to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def close(self) -> None:
        """
        Stop following upstream changes.

        Subscriptions are released once; results of rebuilds still in flight
        are discarded when they arrive.
        """
        if self._closed:
            return
        self._closed = True
        self._generation += 1
        self._release_subscriptions()
        logger.info("Schedule coordinator closed")

    def _subscribe(self, target_date: date) -> None:
        for collection in (Collection.ACTIVITIES, Collection.FILMS):
            unsubscribe = self.store.subscribe(
                collection, target_date, self._make_listener(collection, target_date)
            )
            self._unsubscribers.append(unsubscribe)

    def _release_subscriptions(self) -> None:
        unsubscribers, self._unsubscribers = self._unsubscribers, []
        for unsubscribe in unsubscribers:
            try:
                unsubscribe()
            except Exception as e:
                logger.error(f"Error releasing schedule subscription: {e}", exc_info=True)

    def _make_listener(self, collection: Collection, target_date: date) -> Callable[[], None]:
        """Change callback that hops onto the coordinator's event loop if needed."""

        def listener() -> None:
            loop = self._loop
            if loop is None or loop.is_closed():
                return
            try:
                running = asyncio.get_running_loop()
            except RuntimeError:
                running = None
            if running is loop:
                self._handle_change(collection, target_date)
            else:
                loop.call_soon_threadsafe(self._handle_change, collection, target_date)

        return listener

    def _handle_change(self, collection: Collection, target_date: date) -> None:
        if self._closed or target_date != self._snapshot.target_date:
            logger.debug(f"Ignoring {collection.value} change for inactive date {target_date}")
            return
        if self._snapshot.state not in (RefreshState.LOADING, RefreshState.READY):
            logger.debug(f"Ignoring {collection.value} change in state {self._snapshot.state.value}")
            return

        task = asyncio.create_task(self._refresh(f"{collection.value} changed"))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _refresh(self, reason: str) -> None:
        self._generation += 1
        generation = self._generation
        target_date = self._snapshot.target_date
        if target_date is None:
            return

        logger.info(f"Rebuilding schedule for {target_date} ({reason})")
        self._update(state=RefreshState.LOADING, error=None)

        try:
            activities, films = await asyncio.gather(
                self.store.list_activities(target_date),
                self.store.list_films(),
            )
            items = build_schedule(activities, films, target_date, self.options)
        except Exception as e:
            if generation != self._generation:
                logger.debug(f"Discarding failed stale rebuild for {target_date}: {e}")
                return
            logger.error(f"Error fetching schedule for {target_date}: {e}", exc_info=True)
            self._update(state=RefreshState.ERROR, error=str(e) or FETCH_ERROR_MESSAGE)
            return

        if generation != self._generation:
            logger.debug(
                f"Discarding stale schedule for {target_date} "
                f"(generation {generation}, current {self._generation})"
            )
            return

        self._update(
            state=RefreshState.READY,
            items=items,
            error=None,
            last_updated=datetime.now(timezone.utc),
        )

    def _update(self, **changes: Any) -> None:
        self._snapshot = self._snapshot.model_copy(update=changes)
        if self.on_update is None:
            return
        try:
            self.on_update(self._snapshot)
        except Exception as e:
            logger.error(f"Schedule update listener failed: {e}", exc_info=True)
