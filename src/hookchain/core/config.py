"""Configuration loading (TOML, env vars, .env)."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import fields, replace
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from hookchain.errors import ConfigLoadError
from hookchain.observability.exporters import EXPORTERS, ObservabilityConfig
from hookchain.types.config import EngineConfig

logger = logging.getLogger(__name__)

# Load .env from current directory (and parents), won't override existing env vars
load_dotenv()

CONFIG_DIR = ".hookchain"
CONFIG_FILE = "config.toml"


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(value)


# env var -> (EngineConfig field, parser)
_ENV_FIELDS: dict[str, tuple[str, Any]] = {
    "HOOKCHAIN_DEFAULT_TIMEOUT": ("default_timeout", float),
    "HOOKCHAIN_RETRY_BACKOFF": ("retry_backoff", float),
    "HOOKCHAIN_KILL_ON_TIMEOUT": ("kill_on_timeout", _parse_bool),
    "HOOKCHAIN_SHELL": ("shell", str),
    "HOOKCHAIN_SETTINGS_DIR": ("settings_dir", str),
    "HOOKCHAIN_LOG_LEVEL": ("log_level", str.upper),
}

# [engine] key -> (accepted types, description)
_TOML_TYPES: dict[str, tuple[type | tuple[type, ...], str]] = {
    "default_timeout": ((int, float), "a number"),
    "retry_backoff": ((int, float), "a number"),
    "kill_on_timeout": (bool, "a boolean"),
    "shell": (str, "a string"),
    "settings_dir": (str, "a string"),
    "log_level": (str, "a string"),
}


def load_env_config() -> dict[str, Any]:
    """Load engine settings from ``HOOKCHAIN_*`` environment variables."""
    config: dict[str, Any] = {}
    for env_var, (name, parse) in _ENV_FIELDS.items():
        raw = os.environ.get(env_var)
        if raw is None or raw == "":
            continue
        try:
            config[name] = parse(raw)
        except ValueError as exc:
            raise ConfigLoadError(f"Invalid value for {env_var}: {raw!r}") from exc
    return config


def find_config_file(cwd: str | None = None) -> Path | None:
    """Locate the first ``.hookchain/config.toml`` (project, CWD, then home)."""
    candidates: list[Path] = []
    if cwd:
        candidates.append(Path(cwd) / CONFIG_DIR / CONFIG_FILE)
    candidates.append(Path.cwd() / CONFIG_DIR / CONFIG_FILE)
    candidates.append(Path.home() / CONFIG_DIR / CONFIG_FILE)

    for path in candidates:
        if path.is_file():
            return path
    return None


def load_toml_config(cwd: str | None = None) -> dict[str, Any]:
    """Load the raw TOML configuration, or ``{}`` if there is none."""
    path = find_config_file(cwd)
    if path is None:
        return {}
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return {}


def _toml_engine_value(key: str, value: Any) -> Any:
    expected, label = _TOML_TYPES[key]
    # bool is an int subclass; only accept it where a bool is wanted
    if not isinstance(value, expected) or (isinstance(value, bool) and expected is not bool):
        raise ConfigLoadError(f"[engine] {key} must be {label}, got {value!r}")
    if key == "log_level":
        return value.upper()
    return value


def load_engine_config(cwd: str | None = None) -> EngineConfig:
    """Build the EngineConfig: defaults < ``[engine]`` TOML section < env vars.

    Raises ConfigLoadError for a value of the wrong type or out of range.
    """
    section = load_toml_config(cwd).get("engine", {})

    overrides: dict[str, Any] = {}
    if isinstance(section, dict):
        for key, value in section.items():
            if key in _TOML_TYPES:
                overrides[key] = _toml_engine_value(key, value)
            else:
                logger.debug("Unknown [engine] key ignored: %s", key)
    overrides.update(load_env_config())

    config = replace(EngineConfig(), **overrides)
    if config.default_timeout <= 0:
        raise ConfigLoadError("default_timeout must be positive")
    if config.retry_backoff < 0:
        raise ConfigLoadError("retry_backoff must not be negative")
    if not isinstance(logging.getLevelName(config.log_level), int):
        raise ConfigLoadError(f"Unknown log level: {config.log_level}")
    return config


def load_observability_config(cwd: str | None = None) -> ObservabilityConfig:
    """Load the ``[observability]`` section, with env var overrides.

    ``HOOKCHAIN_OTEL_ENABLED``, ``HOOKCHAIN_OTEL_EXPORTER`` and the standard
    ``OTEL_EXPORTER_OTLP_ENDPOINT`` take precedence over the file.
    """
    section = load_toml_config(cwd).get("observability", {})
    known = {f.name for f in fields(ObservabilityConfig)}
    values: dict[str, Any] = {}
    if isinstance(section, dict):
        values = {k: v for k, v in section.items() if k in known}

    enabled = os.environ.get("HOOKCHAIN_OTEL_ENABLED")
    if enabled:
        try:
            values["enabled"] = _parse_bool(enabled)
        except ValueError as exc:
            raise ConfigLoadError(f"Invalid value for HOOKCHAIN_OTEL_ENABLED: {enabled!r}") from exc
    if os.environ.get("HOOKCHAIN_OTEL_EXPORTER"):
        values["exporter"] = os.environ["HOOKCHAIN_OTEL_EXPORTER"]
    if os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT"):
        values["otlp_endpoint"] = os.environ["OTEL_EXPORTER_OTLP_ENDPOINT"]

    if not isinstance(values.get("enabled", False), bool):
        raise ConfigLoadError("[observability] enabled must be a boolean")
    if values.get("exporter", "console") not in EXPORTERS:
        raise ConfigLoadError(
            f"Unknown exporter {values['exporter']!r}, expected one of {', '.join(EXPORTERS)}",
        )
    return ObservabilityConfig(**values)
