"""Film document table."""

from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from festgrid.models.base import Base, TimestampMixin


class FilmDocument(Base, TimestampMixin):
    """
    Raw film document.

    Film documents come in several schema generations, so nothing is copied
    out into columns; filtering happens after normalization.
    """

    __tablename__ = "films"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)

    def __repr__(self) -> str:
        title = self.data.get("titleEn") or self.data.get("title") if self.data else None
        return f"<FilmDocument(id={self.id!r}, title={title!r})>"
