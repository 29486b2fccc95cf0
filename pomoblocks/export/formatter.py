"""Render saved blocks as CSV or Markdown for other applications.

CSV goes to a file (``pomodoro_blocks.csv``).  Markdown goes either to a
file or, percent-encoded, into the URL scheme of a note-taking app.
"""

from __future__ import annotations

import csv
import io
from enum import Enum
from pathlib import Path
from typing import Iterable
from urllib.parse import quote

from ..blocks import SessionLogEntry, parse_timestamp


CSV_FILENAME = "pomodoro_blocks.csv"
CSV_MIME = "text/csv"
MARKDOWN_FILENAME = "pomodoro_blocks.md"
MARKDOWN_MIME = "text/markdown"

CSV_HEADER = ("Timestamp", "Duration", "Title", "Notes")
MARKDOWN_SEPARATOR = "\n---\n"
MARKDOWN_TAG = "#pomodoro"

# Characters encodeURIComponent leaves alone besides letters and digits.
_URI_COMPONENT_SAFE = "-_.!~*'()"


class ExportTarget(Enum):
    BEAR = "bear"
    APPLE_NOTES = "apple-notes"
    OBSIDIAN = "obsidian"


EXPORT_TARGET_LABELS: dict[ExportTarget, str] = {
    ExportTarget.BEAR: "Bear",
    ExportTarget.APPLE_NOTES: "Apple Notes",
    ExportTarget.OBSIDIAN: "Obsidian",
}

_URL_TEMPLATES: dict[ExportTarget, str] = {
    ExportTarget.BEAR: "bear://x-callback-url/create?text={}",
    ExportTarget.APPLE_NOTES: "mobilenotes://x-callback-url/create?text={}",
    ExportTarget.OBSIDIAN: "obsidian://new?content={}",
}


# ── field helpers ─────────────────────────────────────────────────────────


def format_duration(seconds: int) -> str:
    """``MM:SS``, zero padded; negative values get a leading ``-``."""
    sign = "-" if seconds < 0 else ""
    m, s = divmod(abs(seconds), 60)
    return f"{sign}{m:02d}:{s:02d}"


def format_timestamp(ts: str) -> str:
    """Local, locale-formatted date and time for a stored timestamp."""
    dt = parse_timestamp(ts)
    if dt is None:
        return ts
    return dt.strftime("%x, %X")


def encode_component(text: str) -> str:
    """Percent-encode *text* for use as a single URL query value."""
    return quote(text, safe=_URI_COMPONENT_SAFE)


# ── CSV ───────────────────────────────────────────────────────────────────


def _csv_row(fields: list[str]) -> str:
    buf = io.StringIO()
    csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n").writerow(fields)
    return buf.getvalue()[:-1]


def to_csv(entries: Iterable[SessionLogEntry]) -> str:
    """Header plus one fully quoted row per entry, joined by newlines."""
    rows = [",".join(CSV_HEADER)]
    for entry in entries:
        rows.append(_csv_row([
            format_timestamp(entry.timestamp),
            format_duration(entry.duration),
            entry.title,
            entry.notes,
        ]))
    return "\n".join(rows)


def write_csv(path: Path | str, entries: Iterable[SessionLogEntry]) -> Path:
    path = Path(path)
    path.write_text(to_csv(entries), encoding="utf-8")
    return path


# ── Markdown ──────────────────────────────────────────────────────────────


def _markdown_block(entry: SessionLogEntry) -> str:
    return (
        "\n"
        f"# {entry.title}\n"
        "\n"
        f"- Duration: {format_duration(entry.duration)}\n"
        f"- Timestamp: {format_timestamp(entry.timestamp)}\n"
        "\n"
        f"{entry.notes}\n"
        "\n"
        f"{MARKDOWN_TAG}\n"
    )


def to_markdown(entries: Iterable[SessionLogEntry]) -> str:
    return MARKDOWN_SEPARATOR.join(_markdown_block(e) for e in entries)


def write_markdown(path: Path | str, entries: Iterable[SessionLogEntry]) -> Path:
    path = Path(path)
    path.write_text(to_markdown(entries), encoding="utf-8")
    return path


def export_url(target: ExportTarget, entries: Iterable[SessionLogEntry]) -> str:
    """URL that opens *target* with the Markdown for *entries*."""
    return _URL_TEMPLATES[target].format(encode_component(to_markdown(entries)))
