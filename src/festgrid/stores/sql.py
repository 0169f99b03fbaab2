"""SQLAlchemy-backed document store."""

import logging
from datetime import date
from typing import Any

from pydantic import ValidationError
from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from festgrid.database import AsyncSessionLocal
from festgrid.models import ActivityDocument, FilmDocument
from festgrid.schemas.activity import Activity
from festgrid.schemas.film import FilmRecord
from festgrid.stores.base import BaseDataStore, ChangeCallback, Collection, Unsubscribe
from festgrid.stores.changes import ChangeHub

logger = logging.getLogger(__name__)


class SQLDataStore(BaseDataStore):
    """
    Document store on top of two SQLAlchemy tables.

    Raw documents are stored as JSON. Writes made through this store publish
    change notifications on its ChangeHub.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        hub: ChangeHub | None = None,
    ) -> None:
        """
        Initialize the store.

        Args:
            session_factory: Session factory (uses the application database if not provided)
            hub: Change hub (creates a private one if not provided)
        """
        self.session_factory = session_factory or AsyncSessionLocal
        self.hub = hub or ChangeHub()

    async def list_activities(
        self,
        date_equals: date,
        status: str = "published",
        is_public: bool = True,
    ) -> list[Activity]:
        stmt = (
            select(ActivityDocument)
            .where(
                and_(
                    ActivityDocument.event_date == date_equals.isoformat(),
                    ActivityDocument.status == status,
                    ActivityDocument.is_public == is_public,
                )
            )
            .order_by(ActivityDocument.id)
        )
        async with self.session_factory() as db:
            result = await db.execute(stmt)
            rows = result.scalars().all()

        activities: list[Activity] = []
        for row in rows:
            try:
                activities.append(Activity.from_document(row.id, row.data))
            except ValidationError as e:
                logger.warning(f"Skipping malformed activity {row.id!r}: {e}")

        logger.info(f"Fetched {len(activities)} activities for {date_equals}")
        return activities

    async def list_films(
        self,
        status: str = "published",
        publication_status: str = "public",
    ) -> list[FilmRecord]:
        # Film status lives in several schema generations, so filter after normalizing
        stmt = select(FilmDocument).order_by(FilmDocument.id)
        async with self.session_factory() as db:
            result = await db.execute(stmt)
            rows = result.scalars().all()

        films: list[FilmRecord] = []
        for row in rows:
            try:
                film = FilmRecord.from_document(row.id, row.data)
            except ValidationError as e:
                logger.warning(f"Skipping malformed film {row.id!r}: {e}")
                continue
            if film.status == status and film.publication_status == publication_status:
                films.append(film)

        logger.info(f"Fetched {len(films)} of {len(rows)} films ({status}, {publication_status})")
        return films

    def subscribe(
        self,
        collection: Collection,
        date_equals: date,
        callback: ChangeCallback,
    ) -> Unsubscribe:
        return self.hub.subscribe(collection, date_equals, callback)

    async def save_document(
        self,
        collection: Collection,
        doc_id: str,
        data: dict[str, Any],
    ) -> None:
        """
        Insert or replace a raw document and notify subscribers.

        Args:
            collection: Target collection
            doc_id: Document id
            data: Raw document fields
        """
        affected_dates: set[date | None] = set()

        async with self.session_factory() as db:
            if collection == Collection.ACTIVITIES:
                doc = await db.get(ActivityDocument, doc_id)
                if doc is None:
                    doc = ActivityDocument(id=doc_id)
                    db.add(doc)
                else:
                    affected_dates.add(_parse_event_date(doc.event_date))
                doc.event_date = _event_date_key(data.get("eventDate"))
                doc.status = str(data.get("status") or "draft")
                doc.is_public = bool(data.get("isPublic", False))
                doc.data = data
                affected_dates.add(_parse_event_date(doc.event_date))
            else:
                doc = await db.get(FilmDocument, doc_id)
                if doc is None:
                    db.add(FilmDocument(id=doc_id, data=data))
                else:
                    doc.data = data
            await db.commit()

        logger.info(f"Saved {collection.value} document {doc_id!r}")
        self._publish(collection, affected_dates)

    async def delete_document(self, collection: Collection, doc_id: str) -> bool:
        """
        Delete a raw document and notify subscribers.

        Returns:
            True if a document was deleted
        """
        model = ActivityDocument if collection == Collection.ACTIVITIES else FilmDocument
        affected_dates: set[date | None] = set()

        async with self.session_factory() as db:
            doc = await db.get(model, doc_id)
            if doc is None:
                logger.warning(f"No {collection.value} document {doc_id!r} to delete")
                return False
            if isinstance(doc, ActivityDocument):
                affected_dates.add(_parse_event_date(doc.event_date))
            await db.delete(doc)
            await db.commit()

        logger.info(f"Deleted {collection.value} document {doc_id!r}")
        self._publish(collection, affected_dates)
        return True

    def _publish(self, collection: Collection, affected_dates: set[date | None]) -> None:
        if collection == Collection.FILMS or not affected_dates:
            self.hub.publish(collection)
            return
        for event_date in affected_dates:
            self.hub.publish(collection, event_date)


def _event_date_key(value: Any) -> str | None:
    """``YYYY-MM-DD`` key for an activity's eventDate (date part of date-time strings)."""
    if isinstance(value, date):
        return value.isoformat()[:10]
    if isinstance(value, str) and len(value) >= 10:
        return value[:10]
    return None


def _parse_event_date(key: str | None) -> date | None:
    if not key:
        return None
    try:
        return date.fromisoformat(key)
    except ValueError:
        return None
