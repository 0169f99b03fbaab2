"""Data stores for festival activities and films."""

from festgrid.stores.base import BaseDataStore, ChangeCallback, Collection, Unsubscribe
from festgrid.stores.changes import ChangeHub
from festgrid.stores.sql import SQLDataStore

__all__ = [
    "BaseDataStore",
    "ChangeCallback",
    "ChangeHub",
    "Collection",
    "SQLDataStore",
    "Unsubscribe",
]
