"""Per-user data locations for AerialTimer.

Everything lives under ``~/Library/Application Support/AerialTimer``
unless ``AERIALTIMER_HOME`` points somewhere else.
"""

from __future__ import annotations

import os
from pathlib import Path


def app_support_dir() -> Path:
    override = os.getenv("AERIALTIMER_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / "Library" / "Application Support" / "AerialTimer"


def ensure_directory(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def db_path() -> Path:
    return app_support_dir() / "aerialtimer.db"


def logs_dir() -> Path:
    return app_support_dir() / "logs"


def sounds_dir() -> Path:
    return app_support_dir() / "sounds"
