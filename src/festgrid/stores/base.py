"""Base data store interface for festival documents."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import date
from enum import Enum

from festgrid.schemas.activity import Activity
from festgrid.schemas.film import FilmRecord

ChangeCallback = Callable[[], None]
Unsubscribe = Callable[[], None]


class Collection(str, Enum):
    ACTIVITIES = "activities"
    FILMS = "films"


class BaseDataStore(ABC):
    """
    Abstract source of activities and films.

    Implementations return normalized records; raw documents that cannot be
    normalized are skipped with a warning rather than failing the listing.
    """

    @abstractmethod
    async def list_activities(
        self,
        date_equals: date,
        status: str = "published",
        is_public: bool = True,
    ) -> list[Activity]:
        """
        Fetch activities taking place on one day.

        Args:
            date_equals: Event date
            status: Required activity status
            is_public: Required public flag

        Returns:
            List of activities

        Raises:
            Any transport error. Callers surface it as a fetch failure.
        """

    @abstractmethod
    async def list_films(
        self,
        status: str = "published",
        publication_status: str = "public",
    ) -> list[FilmRecord]:
        """
        Fetch films in their normalized shape.

        Args:
            status: Required film status
            publication_status: Required publication status

        Returns:
            List of films
        """

    @abstractmethod
    def subscribe(
        self,
        collection: Collection,
        date_equals: date,
        callback: ChangeCallback,
    ) -> Unsubscribe:
        """
        Register ``callback`` to be called (without arguments) when documents
        of ``collection`` relevant to ``date_equals`` change.

        Returns:
            Function that removes the subscription
        """
