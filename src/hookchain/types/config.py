"""Configuration types for hookchain."""

from __future__ import annotations

from dataclasses import dataclass

from hookchain.types.hooks import DEFAULT_TIMEOUT_SECONDS


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Settings for the hook execution engine."""

    default_timeout: float = DEFAULT_TIMEOUT_SECONDS  # seconds, when a hook sets none
    retry_backoff: float = 1.0  # seconds between attempts
    kill_on_timeout: bool = True
    shell: str | None = None  # None = system shell (/bin/sh)
    settings_dir: str = ".claude"
    log_level: str = "WARNING"
