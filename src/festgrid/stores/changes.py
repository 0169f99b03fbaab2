"""In-process change notifications for stored documents."""

import logging
import threading
from dataclasses import dataclass
from datetime import date

from festgrid.stores.base import ChangeCallback, Collection, Unsubscribe

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class _Subscription:
    collection: Collection
    date_equals: date
    callback: ChangeCallback
    active: bool = True


class ChangeHub:
    """
    Fan-out of "something changed" events to subscribers.

    Activity events carry the event date and only reach subscribers of that
    day (or everyone when the date is unknown). Film events reach every film
    subscriber, since any film may gain a screening on any day.
    """

    def __init__(self) -> None:
        self._subscriptions: list[_Subscription] = []
        self._lock = threading.Lock()

    def subscribe(
        self,
        collection: Collection,
        date_equals: date,
        callback: ChangeCallback,
    ) -> Unsubscribe:
        subscription = _Subscription(collection, date_equals, callback)
        with self._lock:
            self._subscriptions.append(subscription)
        logger.debug(f"Subscribed to {collection.value} changes for {date_equals}")

        def unsubscribe() -> None:
            with self._lock:
                if not subscription.active:
                    return
                subscription.active = False
                self._subscriptions.remove(subscription)
            logger.debug(f"Unsubscribed from {collection.value} changes for {date_equals}")

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def publish(self, collection: Collection, event_date: date | None = None) -> int:
        """
        Notify the subscribers interested in a change.

        Args:
            collection: Collection that changed
            event_date: Day affected, for activities; None when unknown

        Returns:
            Number of subscribers notified
        """
        with self._lock:
            targets = [
                s
                for s in self._subscriptions
                if s.collection == collection
                and (
                    collection == Collection.FILMS
                    or event_date is None
                    or s.date_equals == event_date
                )
            ]

        for subscription in targets:
            try:
                subscription.callback()
            except Exception as e:
                logger.error(
                    f"Change listener for {collection.value} failed: {e}", exc_info=True
                )
        return len(targets)
