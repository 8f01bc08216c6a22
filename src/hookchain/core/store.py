"""Hook configuration store backed by JSON settings files.

Hooks live under the ``"hooks"`` key of a settings file, keyed by event
identifier::

    {
      "hooks": {
        "OnContextCompact": [
          {"command": "git add . && git commit -m backup", "timeout": 30, "retry": 1}
        ]
      }
    }

Scopes map to files as follows:

* ``user``    -> ``~/.claude/settings.json``
* ``project`` -> ``<project>/.claude/settings.json``
* ``local``   -> ``<project>/.claude/settings.local.json``
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from hookchain.errors import ConfigLoadError, HookConfigError
from hookchain.types.hooks import EnhancedHook

logger = logging.getLogger(__name__)

SCOPES = ("user", "project", "local")


class SettingsHookStore:
    """Reads and writes hook definitions in settings files."""

    def __init__(self, *, settings_dir: str = ".claude", home: Path | None = None) -> None:
        self._settings_dir = settings_dir
        self._home = home

    def settings_path(self, scope: str, project_path: str | None = None) -> Path:
        if scope == "user":
            return (self._home or Path.home()) / self._settings_dir / "settings.json"
        if scope in ("project", "local"):
            if not project_path:
                raise ConfigLoadError(f"Project path is required for {scope} scope")
            name = "settings.json" if scope == "project" else "settings.local.json"
            return Path(project_path) / self._settings_dir / name
        raise ConfigLoadError(f"Invalid scope: {scope}")

    def load(self, scope: str, project_path: str | None = None) -> dict[str, Any]:
        """Return the hooks mapping for a scope, ``{}`` if none is configured."""
        path = self.settings_path(scope, project_path)
        settings = _read_settings(path)
        hooks = settings.get("hooks", {})
        if not isinstance(hooks, dict):
            raise ConfigLoadError(f"'hooks' in {path} must be an object")
        return hooks

    def save(self, scope: str, project_path: str | None, hooks: dict[str, Any]) -> Path:
        """Write the hooks mapping back, keeping the rest of the settings file."""
        path = self.settings_path(scope, project_path)
        settings = _read_settings(path)
        settings["hooks"] = hooks
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(settings, indent=2) + "\n")
        except OSError as exc:
            raise ConfigLoadError(f"Failed to write {path}: {exc}") from exc
        return path


def parse_event_hooks(config: dict[str, Any], event_name: str) -> list[EnhancedHook]:
    """Extract the hooks for *event_name*, dropping malformed entries."""
    entries = config.get(event_name)
    if not isinstance(entries, list):
        return []

    hooks: list[EnhancedHook] = []
    for idx, entry in enumerate(entries):
        try:
            hooks.append(EnhancedHook.from_dict(entry))
        except HookConfigError as exc:
            logger.debug("Dropping malformed %s hook #%d: %s", event_name, idx, exc)
    return hooks


def _read_settings(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigLoadError(f"Failed to read settings {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigLoadError(f"Settings file {path} must contain a JSON object")
    return data
