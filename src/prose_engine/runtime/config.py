"""Engine and logging configuration resolved from arguments or the environment.

Every variable is read under the ``PROSE_ENGINE_`` prefix, e.g.
``PROSE_ENGINE_HISTORY_LIMIT`` or ``PROSE_ENGINE_LOG_LEVEL``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

ENV_PREFIX = "PROSE_ENGINE_"
DEFAULT_HISTORY_LIMIT = 100
DEFAULT_BATCH_WINDOW_MS = 500
DEFAULT_LOG_LEVEL = "WARNING"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def env_int(name: str, fallback: int) -> int:
    """Positive integer from the environment, ``fallback`` when unset or invalid."""

    raw = env(name)
    if raw is None:
        return fallback
    try:
        value = int(raw)
    except ValueError:
        return fallback
    return value if value > 0 else fallback


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Tunables for one editing session.

    ``history_limit`` caps both undo and redo stacks. ``batch_window_ms`` is
    the window in which consecutive character inserts share one undo step.
    ``debug_invariants`` validates the full state after every dispatched key.
    """

    history_limit: int = DEFAULT_HISTORY_LIMIT
    batch_window_ms: int = DEFAULT_BATCH_WINDOW_MS
    debug_invariants: bool = False

    def __post_init__(self) -> None:
        if self.history_limit <= 0:
            raise ValueError("history_limit must be positive")
        if self.batch_window_ms < 0:
            raise ValueError("batch_window_ms cannot be negative")

    @property
    def batch_window(self) -> float:
        return self.batch_window_ms / 1000.0

    @classmethod
    def from_env(cls) -> "EngineConfig":
        return cls(
            history_limit=env_int("HISTORY_LIMIT", DEFAULT_HISTORY_LIMIT),
            batch_window_ms=env_int("BATCH_WINDOW_MS", DEFAULT_BATCH_WINDOW_MS),
            debug_invariants=env_flag("DEBUG", False),
        )


@dataclass(frozen=True, slots=True)
class LogSettings:
    """Where and how telemetry is written.

    ``buffered`` with no ``buffer_size`` keeps telelog's own buffer size.
    """

    level: str = DEFAULT_LOG_LEVEL
    console: bool = True
    colored: bool = True
    json_format: bool = False
    log_file: Optional[str] = None
    buffered: bool = False
    buffer_size: Optional[int] = None

    @classmethod
    def from_env(cls) -> "LogSettings":
        buffered = env_flag("LOG_BUFFERED", False)
        return cls(
            level=(env("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
            console=not env_flag("DISABLE_CONSOLE", False),
            colored=not env_flag("NO_COLOR", False),
            json_format=env_flag("LOG_JSON", False),
            log_file=env("LOG_FILE") or None,
            buffered=buffered,
            buffer_size=env_int("LOG_BUFFER_SIZE", 2048) if buffered else None,
        )

    @classmethod
    def preset(cls, name: str) -> "LogSettings":
        """Named setups; ``PROSE_ENGINE_LOG_FILE`` still picks the file."""

        key = name.lower()
        if key == "development":
            return cls(level="DEBUG")
        if key == "production":
            return cls(
                level="INFO",
                console=False,
                log_file=env("LOG_FILE") or "prose_engine.log",
                buffered=True,
            )
        if key in {"performance", "performance_analysis"}:
            return cls(
                level="DEBUG",
                console=False,
                json_format=True,
                log_file=env("LOG_FILE") or "prose_engine-performance.log",
                buffered=True,
            )
        raise ValueError(f"Unknown preset '{name}'.")


__all__ = [
    "DEFAULT_BATCH_WINDOW_MS",
    "DEFAULT_HISTORY_LIMIT",
    "ENV_PREFIX",
    "EngineConfig",
    "LogSettings",
    "env",
    "env_flag",
    "env_int",
]
