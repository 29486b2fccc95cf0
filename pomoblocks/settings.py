"""Application settings with JSON persistence.

Settings are stored at ``<data dir>/settings.json`` (see
:mod:`pomoblocks.paths`).

Usage::

    settings = load_settings()
    settings.long_session = True
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .paths import app_support_dir

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.json"


def settings_path() -> Path:
    return app_support_dir() / SETTINGS_FILENAME


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    long_session: bool = False             # 50 min instead of 25

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100

    # ── window ────────────────────────────────────────────────────────
    window_x: int | None = None
    window_y: int | None = None
    window_width: int = 480
    window_height: int = 720


_DEFAULTS = asdict(Settings())


def _matches_default(key: str, value: object) -> bool:
    """True if *value* has the type of the field's default.

    ``None`` defaults (window position) accept ``None`` or an int.
    """
    default = _DEFAULTS[key]
    if isinstance(default, bool):
        return isinstance(value, bool)
    if value is None:
        return default is None
    return isinstance(value, int) and not isinstance(value, bool)


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from disk, falling back to defaults."""
    path = path or settings_path()
    try:
        if path.exists():
            data = json.loads(path.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {}
            for key, value in data.items():
                if key not in valid_keys:
                    continue
                if not _matches_default(key, value):
                    logger.warning("Ignoring setting %s=%r: wrong type", key, value)
                    continue
                filtered[key] = value
            return Settings(**filtered)
    except (OSError, ValueError, AttributeError, TypeError) as exc:
        logger.warning("Could not read settings from %s: %s", path, exc)
    return Settings()


def save_settings(settings: Settings, path: Path | None = None) -> None:
    """Write settings to disk as JSON."""
    path = path or settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
