from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class TimeTxtConfig:
    file: str | None = None
    sort_dates: bool = False
    show_elapsed: bool = False
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        self.log_level = _normalize_level(self.log_level)


def load_config(path: str) -> TimeTxtConfig:
    """Load settings from a JSON object with keys matching `TimeTxtConfig`."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config {path!r} must contain a JSON object")
    return TimeTxtConfig(
        file=(str(data["file"]) if data.get("file") is not None else None),
        sort_dates=_as_bool(data.get("sort_dates", False)),
        show_elapsed=_as_bool(data.get("show_elapsed", False)),
        log_level=str(data.get("log_level") or "WARNING"),
    )


def load_from_env(default_path: str | None = None) -> TimeTxtConfig:
    """Build a config from TIMETXT_CONFIG_PATH (or a default path) and env overrides.

    Environment variables: TIMETXT_FILE, TIMETXT_SORT_DATES,
    TIMETXT_SHOW_ELAPSED, TIMETXT_LOG_LEVEL. A missing or unreadable config
    file falls back to defaults.
    """
    cfg = TimeTxtConfig()
    path = os.environ.get("TIMETXT_CONFIG_PATH") or default_path
    if path and os.path.isfile(path):
        try:
            cfg = load_config(path)
        except (OSError, ValueError) as exc:
            logger.warning("ignoring config %s: %s", path, exc)

    if os.environ.get("TIMETXT_FILE"):
        cfg.file = os.environ["TIMETXT_FILE"]
    if "TIMETXT_SORT_DATES" in os.environ:
        cfg.sort_dates = _as_bool(os.environ["TIMETXT_SORT_DATES"])
    if "TIMETXT_SHOW_ELAPSED" in os.environ:
        cfg.show_elapsed = _as_bool(os.environ["TIMETXT_SHOW_ELAPSED"])
    if os.environ.get("TIMETXT_LOG_LEVEL"):
        cfg.log_level = _normalize_level(os.environ["TIMETXT_LOG_LEVEL"])
    return cfg


def _as_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


def _normalize_level(value: str | None) -> str:
    level = (value or "").strip().upper()
    return level if level in _LOG_LEVELS else "WARNING"
