"""Key-value access to the local store.

Values are opaque strings; callers own their serialization.  Every write
commits immediately.
"""

from __future__ import annotations

from datetime import datetime, timezone

from .db import get_session
from .models import StoredItem


def get_item(key: str) -> str | None:
    """Return the stored string for *key*, or ``None`` when absent."""
    with get_session() as db:
        item = db.get(StoredItem, key)
        return item.value if item is not None else None


def set_item(key: str, value: str) -> None:
    with get_session() as db:
        item = db.get(StoredItem, key)
        if item is None:
            db.add(StoredItem(key=key, value=value, updated_at=datetime.now(timezone.utc)))
        else:
            item.value = value
            item.updated_at = datetime.now(timezone.utc)


def remove_item(key: str) -> None:
    """Delete *key*.  Removing a missing key is a no-op."""
    with get_session() as db:
        item = db.get(StoredItem, key)
        if item is not None:
            db.delete(item)
