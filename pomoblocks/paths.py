"""Filesystem locations for PomoBlocks data."""

from __future__ import annotations

import os
from pathlib import Path


DEFAULT_APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "PomoBlocks"


def app_support_dir() -> Path:
    """Data directory; ``$POMOBLOCKS_HOME`` wins over the default."""
    env = os.environ.get("POMOBLOCKS_HOME")
    if env:
        return Path(env).expanduser().resolve()
    return DEFAULT_APP_SUPPORT_DIR
