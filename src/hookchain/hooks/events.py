"""Hook context passed to every hook in a chain."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from hookchain.types.hooks import HookEvent


@dataclass(frozen=True, slots=True)
class HookContext:
    """Immutable snapshot of the event that triggered a chain."""

    event: str
    session_id: str = ""
    project_path: str = ""
    data: Any = field(default_factory=dict)  # event-specific payload

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> HookContext:
        return cls(
            event=str(raw.get("event", "")),
            session_id=str(raw.get("session_id", "")),
            project_path=str(raw.get("project_path", "")),
            data=raw.get("data", {}),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "event": self.event,
            "session_id": self.session_id,
            "project_path": self.project_path,
            "data": self.data,
        }

    def to_json(self) -> str:
        """Compact JSON form exposed to hooks as ``HOOK_CONTEXT``."""
        return json.dumps(self.to_dict(), separators=(",", ":"), default=str)

    def to_env(self) -> dict[str, str]:
        """Environment for a primary hook invocation."""
        return {
            "HOOK_CONTEXT": self.to_json(),
            "HOOK_EVENT": self.event,
            "SESSION_ID": self.session_id,
            "PROJECT_PATH": self.project_path,
        }

    def to_cascade_env(self) -> dict[str, str]:
        """Environment for on_success / on_failure commands."""
        return {
            "SESSION_ID": self.session_id,
            "PROJECT_PATH": self.project_path,
        }


def build_hook_context(
    event: HookEvent | str,
    *,
    session_id: str = "",
    project_path: str | Path = "",
    data: Any = None,
) -> HookContext:
    """Build a HookContext for a given event."""
    return HookContext(
        event=event.value if isinstance(event, HookEvent) else event,
        session_id=session_id,
        project_path=str(project_path),
        data=data if data is not None else {},
    )
