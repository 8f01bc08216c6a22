"""Built-in hook templates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from hookchain.types.hooks import ConditionalTrigger, EnhancedHook, HookEvent


@dataclass(frozen=True, slots=True)
class HookTemplate:
    """A named set of hooks to install on one or more events."""

    name: str
    description: str
    events: tuple[HookEvent, ...]
    hooks: tuple[EnhancedHook, ...]


TEMPLATES: tuple[HookTemplate, ...] = (
    HookTemplate(
        name="Auto Backup",
        description="Commit the working tree when the context is compacted",
        events=(HookEvent.ON_CONTEXT_COMPACT,),
        hooks=(
            EnhancedHook(
                command='git add . && git commit -m "Auto backup: $(date)"',
                timeout=30,
                retry=1,
            ),
        ),
    ),
    HookTemplate(
        name="Session Logging",
        description="Record session start and end times",
        events=(HookEvent.ON_SESSION_START, HookEvent.ON_SESSION_END),
        hooks=(
            EnhancedHook(command='echo "$(date): Session $HOOK_EVENT" >> session.log', timeout=5),
        ),
    ),
    HookTemplate(
        name="Performance Monitoring",
        description="Log memory usage around tool calls",
        events=(HookEvent.PRE_TOOL_USE, HookEvent.POST_TOOL_USE),
        hooks=(
            EnhancedHook(
                command='echo "$(date): $HOOK_EVENT - Memory: $(free -h | grep Mem)" >> perf.log',
                timeout=10,
            ),
        ),
    ),
    HookTemplate(
        name="File Change Notification",
        description="Desktop notification when files are modified",
        events=(HookEvent.ON_FILE_CHANGE,),
        hooks=(
            EnhancedHook(
                command='notify-send "File Modified" "Project: $PROJECT_PATH"',
                timeout=5,
                condition=ConditionalTrigger(condition='event == "OnFileChange"', enabled=True),
            ),
        ),
    ),
)


def get_template(name: str) -> HookTemplate:
    """Look up a template by name (case-insensitive)."""
    wanted = name.strip().lower()
    for template in TEMPLATES:
        if template.name.lower() == wanted:
            return template
    raise KeyError(f"Unknown template: {name}")


def apply_template(config: dict[str, Any], template: HookTemplate) -> dict[str, Any]:
    """Return a copy of *config* with the template's hooks appended per event."""
    updated = {event: list(entries) if isinstance(entries, list) else entries
               for event, entries in config.items()}
    for event in template.events:
        existing = updated.get(event.value)
        entries = existing if isinstance(existing, list) else []
        entries.extend(hook.to_dict() for hook in template.hooks)
        updated[event.value] = entries
    return updated
