"""Filesystem paths and config/cache locations."""

import os
import sys
from pathlib import Path


def _default_base_dir() -> Path:
    """Return the writable base directory for config/cache/logging."""
    override = os.getenv("AUTOBUILD_HOME")
    if override:
        return Path(override).expanduser().resolve()
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parent.parent.parent


BASE_DATA_DIR = _default_base_dir()
CONFIG_DIR = BASE_DATA_DIR / "config"
CACHE_DIR = BASE_DATA_DIR / "cache"
LOGS_DIR = BASE_DATA_DIR / "logs"


def ensure_base_dirs() -> None:
    """Ensure base config/cache/log directories exist without importing side effects."""
    BASE_DATA_DIR.mkdir(parents=True, exist_ok=True)
    for path in (CONFIG_DIR, CACHE_DIR, LOGS_DIR):
        path.mkdir(parents=True, exist_ok=True)


CONFIG_FILE = CONFIG_DIR / "config.json"

FAVORITES_CACHE_FILE = CACHE_DIR / "favorites.json"
CURRENCY_RATE_CACHE_FILE = CACHE_DIR / "currency_rates.json"
LOG_FILE = LOGS_DIR / "autobuild.log"
