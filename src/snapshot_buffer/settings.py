"""Environment-driven configuration for snapshot_buffer.

Every knob is read from a ``SNAPSHOT_BUFFER_`` prefixed environment variable:

``LOG_LEVEL`` -- minimum telelog level (default ``INFO``)
``LOG_FILE`` -- optional file sink
``LOG_JSON`` / ``DISABLE_CONSOLE`` / ``NO_COLOR`` -- output toggles
``LOGGER`` -- default logger name
``HISTORY_CAPACITY`` -- default snapshot capacity for new buffers
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

ENV_PREFIX = "SNAPSHOT_BUFFER_"
DEFAULT_HISTORY_CAPACITY = 5
DEFAULT_LOGGER_NAME = "snapshot_buffer"

_SETTINGS: Optional["Settings"] = None


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = _env(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(
            f"{ENV_PREFIX}{name} must be an integer, got {raw!r}"
        ) from exc


@dataclass(frozen=True, slots=True)
class Settings:
    log_level: str = "INFO"
    log_file: str = ""
    log_json: bool = False
    console: bool = True
    colored: bool = True
    logger_name: str = DEFAULT_LOGGER_NAME
    history_capacity: int = DEFAULT_HISTORY_CAPACITY

    @classmethod
    def from_env(cls) -> "Settings":
        capacity = _env_int("HISTORY_CAPACITY", DEFAULT_HISTORY_CAPACITY)
        if capacity < 0:
            raise ValueError(
                f"{ENV_PREFIX}HISTORY_CAPACITY must be >= 0, got {capacity}"
            )
        return cls(
            log_level=(_env("LOG_LEVEL") or "INFO").upper(),
            log_file=_env("LOG_FILE") or "",
            log_json=_env_flag("LOG_JSON", False),
            console=not _env_flag("DISABLE_CONSOLE", False),
            colored=not _env_flag("NO_COLOR", False),
            logger_name=_env("LOGGER") or DEFAULT_LOGGER_NAME,
            history_capacity=capacity,
        )


def get_settings() -> Settings:
    """Return the process-wide settings, reading the environment once."""

    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS


def reset_settings() -> None:
    global _SETTINGS
    _SETTINGS = None


__all__ = [
    "DEFAULT_HISTORY_CAPACITY",
    "DEFAULT_LOGGER_NAME",
    "ENV_PREFIX",
    "Settings",
    "get_settings",
    "reset_settings",
]
