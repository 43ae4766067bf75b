"""Structured logging for the editor, backed by telelog.

The raw-mode host owns the terminal, so nothing goes to the console unless
``PICO_ENGINE_LOG_CONSOLE`` asks for it. Set ``PICO_ENGINE_LOG_FILE`` to keep
a session log instead.
"""

from __future__ import annotations

from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, List, Optional, Tuple, cast

import telelog  # type: ignore[import]

from .config import env, env_flag

tl = cast(Any, telelog)

ROOT_LOGGER = env("LOGGER", "pico_engine") or "pico_engine"


@dataclass(frozen=True, slots=True)
class LogSettings:
    """What telelog should do with editor log lines."""

    level: str = "INFO"
    console: bool = False
    colored: bool = True
    json: bool = False
    file: Optional[str] = None
    buffered: bool = False

    @classmethod
    def from_env(cls) -> "LogSettings":
        return cls(
            level=(env("LOG_LEVEL") or "INFO").upper(),
            console=env_flag("LOG_CONSOLE", False),
            colored=not env_flag("NO_COLOR", False),
            json=env_flag("LOG_JSON", False),
            file=env("LOG_FILE") or None,
        )

    def build(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.colored)
        config.with_json_format(self.json)
        if self.file:
            config.with_file_output(self.file)
        if self.buffered:
            config.with_buffering(True)
        config.with_profiling(True)
        return config


PRESETS: Dict[str, LogSettings] = {
    # Console output only makes sense when a host other than the raw
    # terminal owns the screen.
    "debug": LogSettings(level="DEBUG", console=True, colored=True),
    "session": LogSettings(file="pico_engine.log", buffered=True),
    "quiet": LogSettings(level="ERROR"),
}


class _State:
    config: Optional[Any] = None
    loggers: Dict[str, Any] = {}


def configure(
    *,
    config: Optional[Any] = None,
    preset: Optional[str] = None,
    settings: Optional[LogSettings] = None,
) -> None:
    """Swap the telelog configuration used by every editor logger.

    Exactly one of ``config`` (a ready ``telelog.Config``), ``preset`` (a
    key of :data:`PRESETS`) or ``settings`` may be given; with none the
    environment decides. Cached loggers are dropped.
    """

    given = [arg for arg in (config, preset, settings) if arg is not None]
    if len(given) > 1:
        raise ValueError("Pass only one of `config`, `preset` or `settings`.")
    if preset is not None:
        try:
            settings = PRESETS[preset.lower()]
        except KeyError as exc:
            raise ValueError(f"Unknown preset '{preset}'.") from exc
        if settings.file:
            settings = replace(settings, file=env("LOG_FILE") or settings.file)
    if config is None:
        config = (settings or LogSettings.from_env()).build()
    _State.config = config
    _State.loggers.clear()


def get_logger(name: Optional[str] = None) -> Any:
    """Return the cached ``telelog.Logger`` for ``name``."""

    key = name or ROOT_LOGGER
    logger = _State.loggers.get(key)
    if logger is None:
        if _State.config is None:
            configure()
        logger = tl.Logger.with_config(key, _State.config)
        _State.loggers[key] = logger
    return logger


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _write(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    """Log ``message`` with ``payload`` as structured pairs when supported."""

    name = str(level).lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(k), _text(v)) for k, v in payload.items()])
        return
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Log an ``event::<name>`` line (saves, quits, mode switches...)."""

    _write(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Lets the body of a :func:`span` attach results to its failure line."""

    name: str
    component: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def payload(self, **extra: Any) -> Dict[str, str]:
        data = {"span": self.name, **self.metadata}
        if self.component:
            data["component"] = self.component
        data.update({key: _text(value) for key, value in extra.items()})
        return data


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block under ``name``.

    ``component`` tracks the block as a telelog component (``True`` reuses
    ``name``). ``metadata`` becomes logger context until the block exits; an
    exception escaping the block is logged at error level and re-raised.
    """

    log = get_logger(logger_name)
    handle = SpanHandle(name, name if component is True else component or None)
    pushed: List[Tuple[str, str]] = []
    for key, value in (metadata or {}).items():
        handle.add_metadata(key, value)
        pushed.append((key, handle.metadata[key]))

    with ExitStack() as stack:
        for key, value in pushed:
            log.add_context(key, value)
            stack.callback(log.remove_context, key)
        if handle.component:
            stack.enter_context(log.track_component(handle.component))
        stack.enter_context(log.profile(name))
        try:
            yield handle
        except Exception as exc:
            _write(log, "error", "span::fail", handle.payload(reason=exc))
            raise


__all__ = [
    "LogSettings",
    "PRESETS",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
