"""SQLAlchemy ORM models."""

from festgrid.models.activity import ActivityDocument
from festgrid.models.base import Base
from festgrid.models.film import FilmDocument

__all__ = ["Base", "ActivityDocument", "FilmDocument"]
