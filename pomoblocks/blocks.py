"""Saved work blocks and the local user session.

Both live in the key-value store as JSON strings:

- ``pomodoroBlocks`` holds the list of saved blocks, oldest first.
- ``user`` holds ``{"username": ...}`` while someone is logged in.

Anything missing or unreadable reads back as the empty state.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict
from datetime import date, datetime, timezone
from typing import Any

from .database.store import get_item, set_item, remove_item

logger = logging.getLogger(__name__)

BLOCKS_KEY = "pomodoroBlocks"
USER_KEY = "user"


# ── records ───────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SessionLogEntry:
    """A saved work block.  Never mutated after creation."""

    timestamp: str
    duration: int
    title: str = ""
    notes: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionLogEntry":
        timestamp = data["timestamp"]
        duration = data["duration"]
        if not isinstance(timestamp, str):
            raise ValueError(f"timestamp must be a string, got {timestamp!r}")
        if isinstance(duration, bool) or not isinstance(duration, (int, float)):
            raise ValueError(f"duration must be a number, got {duration!r}")
        return cls(
            timestamp=timestamp,
            duration=int(duration),
            title=str(data.get("title") or ""),
            notes=str(data.get("notes") or ""),
        )


@dataclass(frozen=True)
class UserSession:
    """Whoever is logged in.  Credentials are never checked."""

    username: str


@dataclass(frozen=True)
class DailySummary:
    date: date
    label: str  # locale-formatted date
    total_seconds: int
    entry_count: int


# ── timestamps ────────────────────────────────────────────────────────────


def now_timestamp() -> str:
    """Current UTC time as ISO 8601 with milliseconds, e.g.
    ``2026-10-19T08:30:00.123Z``."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(ts: str) -> datetime | None:
    """Parse a stored timestamp into an aware local datetime.

    Naive values are taken as local time.  Returns ``None`` on garbage.
    """
    try:
        dt = datetime.fromisoformat(ts.strip().replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return None
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt.astimezone()


# ── block log ─────────────────────────────────────────────────────────────


def _read_json(key: str) -> Any:
    raw = get_item(key)
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Ignoring unreadable value stored under %r", key)
        return None


def load_entries() -> list[SessionLogEntry]:
    """All saved blocks in insertion order."""
    data = _read_json(BLOCKS_KEY)
    if data is None:
        return []
    if not isinstance(data, list):
        logger.warning("Expected a list under %r, got %s", BLOCKS_KEY, type(data).__name__)
        return []

    entries: list[SessionLogEntry] = []
    for item in data:
        try:
            entries.append(SessionLogEntry.from_dict(item))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping malformed block %r: %s", item, exc)
    return entries


def save_entries(entries: list[SessionLogEntry]) -> None:
    set_item(BLOCKS_KEY, json.dumps([e.to_dict() for e in entries]))


def append_entry(entry: SessionLogEntry) -> list[SessionLogEntry]:
    """Append *entry*, persist, and return the updated list."""
    entries = load_entries()
    entries.append(entry)
    save_entries(entries)
    logger.info("Saved block %r (%ss)", entry.title, entry.duration)
    return entries


def clear_entries() -> None:
    remove_item(BLOCKS_KEY)


def daily_summaries(entries: list[SessionLogEntry]) -> list[DailySummary]:
    """Per-day totals, in order of each day's first appearance in *entries*."""
    totals: dict[date, list[int]] = {}
    for entry in entries:
        dt = parse_timestamp(entry.timestamp)
        if dt is None:
            logger.debug("No date for block with timestamp %r", entry.timestamp)
            continue
        bucket = totals.setdefault(dt.date(), [0, 0])
        bucket[0] += entry.duration
        bucket[1] += 1

    return [
        DailySummary(
            date=day,
            label=day.strftime("%x"),
            total_seconds=seconds,
            entry_count=count,
        )
        for day, (seconds, count) in totals.items()
    ]


# ── user session ──────────────────────────────────────────────────────────


def login(identifier: str, password: str = "") -> UserSession:
    """Create and persist a user session.

    *identifier* is an email or username.  The password is accepted and
    dropped; nothing is verified.
    """
    username = (identifier or "").strip()
    if not username:
        raise ValueError("an email or username is required")
    user = UserSession(username=username)
    set_item(USER_KEY, json.dumps(asdict(user)))
    logger.info("Logged in as %s", username)
    return user


def current_user() -> UserSession | None:
    data = _read_json(USER_KEY)
    if not isinstance(data, dict):
        return None
    username = data.get("username")
    if not isinstance(username, str) or not username:
        return None
    return UserSession(username=username)


def logout() -> None:
    remove_item(USER_KEY)
    logger.info("Logged out")
