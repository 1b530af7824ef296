"""User settings stored as JSON under ~/.config/neomama."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from neomama.models import AppConfig, HistoryMode

log = logging.getLogger(__name__)

_CONFIG_DIR = Path.home() / ".config" / "neomama"
_DB_DIR = Path.home() / ".local" / "share" / "neomama"
_DB_FILENAME = "neomama.db"

_CONFIG_FILE = _CONFIG_DIR / "config.json"


def load_config() -> AppConfig:
    """Read settings; a missing or unreadable file gives the defaults."""
    if not _CONFIG_FILE.exists():
        return AppConfig()
    try:
        return AppConfig.model_validate(json.loads(_CONFIG_FILE.read_text()))
    except (json.JSONDecodeError, ValidationError):
        log.warning("Ignoring unreadable config file %s", _CONFIG_FILE)
        return AppConfig()


def save_config(config: AppConfig) -> Path:
    """Persist *config* and return the file it went to."""
    _CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    _CONFIG_FILE.write_text(config.model_dump_json(indent=2))
    return _CONFIG_FILE


def _update(**changes: Any) -> AppConfig:
    """Apply *changes* to the stored settings, validate, save."""
    merged = load_config().model_dump() | changes
    config = AppConfig.model_validate(merged)
    save_config(config)
    log.debug("config updated: %s", changes)
    return config


def get_db_path() -> Path:
    """Where the database lives: the configured file, else the default location."""
    config = load_config()
    path = Path(config.db_path) if config.db_path is not None else _DB_DIR / _DB_FILENAME
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def set_db_path(path: str) -> AppConfig:
    """Point the app at a custom database file (or a folder to hold one)."""
    target = Path(path).expanduser().resolve()
    if target.is_dir():
        target = target / _DB_FILENAME
    target.parent.mkdir(parents=True, exist_ok=True)
    return _update(db_path=str(target))


def reset_db_path() -> AppConfig:
    return _update(db_path=None)


def set_splash_delay(seconds: float) -> AppConfig:
    """Seconds the splash screen shows before moving on. Raises ValidationError if negative."""
    return _update(splash_delay_s=seconds)


def set_history_mode(mode: HistoryMode) -> AppConfig:
    """Choose whether plain navigation records history for "back"."""
    return _update(history_mode=mode)
