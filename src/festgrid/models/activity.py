"""Activity document table."""

from typing import Any

from sqlalchemy import JSON, Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from festgrid.models.base import Base, TimestampMixin


class ActivityDocument(Base, TimestampMixin):
    """
    Raw activity document.

    The full document is kept verbatim in ``data``; the columns used by the
    per-day query are copied out of it so they can be indexed.
    """

    __tablename__ = "activities"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    event_date: Mapped[str | None] = mapped_column(String(10), nullable=True, index=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="draft", index=True)
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<ActivityDocument(id={self.id!r}, event_date={self.event_date!r}, "
            f"status={self.status!r})>"
        )
