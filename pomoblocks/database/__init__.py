"""Database package."""

from .db import configure_engine, get_session, init_db
from .models import StoredItem
from .store import get_item, set_item, remove_item

__all__ = [
    "configure_engine",
    "get_session",
    "init_db",
    "StoredItem",
    "get_item",
    "set_item",
    "remove_item",
]
