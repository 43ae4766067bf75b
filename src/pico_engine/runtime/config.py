"""Editor configuration sourced from defaults and ``PICO_ENGINE_*`` variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Optional

ENV_PREFIX = "PICO_ENGINE_"


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, fallback: int, *, minimum: int = 0) -> int:
    raw = env(name)
    if raw is None:
        return fallback
    try:
        value = int(raw)
    except ValueError:
        return fallback
    return value if value >= minimum else fallback


def _env_float(name: str, fallback: float) -> float:
    raw = env(name)
    if raw is None:
        return fallback
    try:
        value = float(raw)
    except ValueError:
        return fallback
    return value if value >= 0 else fallback


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Tunables shared by the buffer, viewport, modes and frame composer."""

    tab_stop: int = 2
    scroll_padding: int = 4
    quit_times: int = 3
    message_timeout: float = 5.0
    gutter: str = ""
    prompt_maxlen: int = 128

    def __post_init__(self) -> None:
        if self.tab_stop < 1:
            raise ValueError("tab_stop must be positive")
        if self.scroll_padding < 0:
            raise ValueError("scroll_padding cannot be negative")
        if self.quit_times < 1:
            raise ValueError("quit_times must be positive")

    @classmethod
    def from_env(cls) -> "EditorConfig":
        defaults = {f.name: f.default for f in fields(cls)}
        return cls(
            tab_stop=_env_int("TAB_STOP", defaults["tab_stop"], minimum=1),
            scroll_padding=_env_int("SCROLL_PADDING", defaults["scroll_padding"]),
            quit_times=_env_int("QUIT_TIMES", defaults["quit_times"], minimum=1),
            message_timeout=_env_float(
                "MESSAGE_TIMEOUT", defaults["message_timeout"]
            ),
            gutter=env("GUTTER", defaults["gutter"]) or "",
            prompt_maxlen=_env_int(
                "PROMPT_MAXLEN", defaults["prompt_maxlen"], minimum=1
            ),
        )


__all__ = ["ENV_PREFIX", "EditorConfig", "env", "env_flag"]
