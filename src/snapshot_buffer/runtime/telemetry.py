"""Telelog-backed logging for buffer operations.

Buffers talk to this module through two calls: ``record_event`` for one-off
history events (evictions, undo, clears) and ``span`` around each operation.
The telelog config is derived from ``snapshot_buffer.settings`` unless a
caller hands ``configure`` an explicit ``tl.Config``.
"""

from __future__ import annotations

from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

from snapshot_buffer.settings import Settings, get_settings

tl = cast(Any, telelog)

_LOGGERS: MutableMapping[str, Any] = {}
_CONFIG: Optional[Any] = None


def _text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def _with_profiling(config: Any) -> Any:
    # span() opens logger.profile(); nothing is recorded unless this is on
    config.with_profiling(True)
    return config


def build_config(settings: Settings) -> Any:
    """Translate ``Settings`` into a telelog config."""

    config = tl.Config()
    config.with_min_level(settings.log_level)
    config.with_console_output(settings.console)
    if settings.console:
        config.with_colored_output(settings.colored)
    if settings.log_json:
        config.with_json_format(True)
    if settings.log_file:
        config.with_file_output(settings.log_file)
    return _with_profiling(config)


def configure(config: Optional[Any] = None) -> Any:
    """Install ``config`` (or the settings-derived default) and drop cached loggers."""

    global _CONFIG
    if config is None:
        config = build_config(get_settings())
    _CONFIG = _with_profiling(config)
    _LOGGERS.clear()
    return _CONFIG


def get_logger(name: Optional[str] = None) -> Any:
    logger_name = name or get_settings().logger_name
    logger = _LOGGERS.get(logger_name)
    if logger is None:
        config = _CONFIG if _CONFIG is not None else configure()
        logger = tl.Logger.with_config(logger_name, config)
        _LOGGERS[logger_name] = logger
    return logger


def _emit(logger: Any, level: str, message: str, fields: Dict[str, Any]) -> None:
    """Log ``message`` with ``fields``, preferring telelog's ``<level>_with``."""

    level = level.lower()
    structured = getattr(logger, f"{level}_with", None)
    if structured is not None:
        structured(message, [(key, _text(value)) for key, value in fields.items()])
        return
    plain = getattr(logger, level, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {fields}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Live view of an open span; annotations land in the failure report."""

    logger: Any
    name: str
    component: Optional[str] = None
    fields: Dict[str, str] = field(default_factory=dict)

    def annotate(self, key: str, value: Any) -> None:
        self.fields[key] = _text(value)

    def fail(self, error: BaseException) -> None:
        payload: Dict[str, Any] = {"span": self.name, **self.fields}
        if self.component:
            payload["component"] = self.component
        payload["error"] = type(error).__name__
        payload["reason"] = str(error)
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block as ``name``, tracked under ``component`` when given.

    ``context`` entries are attached to the logger while the block runs. An
    exception escaping the block is reported as ``span::fail`` and re-raised.
    """

    log = get_logger(logger_name)
    fields = {key: _text(value) for key, value in (context or {}).items()}
    handle = SpanHandle(logger=log, name=name, component=component, fields=dict(fields))

    with ExitStack() as stack:
        for key, value in fields.items():
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if component:
            stack.enter_context(log.track_component(component))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            handle.fail(exc)
            raise


__all__ = [
    "SpanHandle",
    "build_config",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
