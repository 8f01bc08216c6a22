"""Hook types for the hookchain event system."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

from hookchain.errors import HookConfigError, UnknownEventError

DEFAULT_TIMEOUT_SECONDS = 30
SKIPPED_OUTPUT = "Skipped: condition not met"


class HookEvent(Enum):
    """Events that can trigger hook chains."""

    PRE_TOOL_USE = "PreToolUse"
    POST_TOOL_USE = "PostToolUse"
    NOTIFICATION = "Notification"
    STOP = "Stop"
    SUBAGENT_STOP = "SubagentStop"
    ON_CONTEXT_COMPACT = "OnContextCompact"
    ON_AGENT_SWITCH = "OnAgentSwitch"
    ON_FILE_CHANGE = "OnFileChange"
    ON_SESSION_START = "OnSessionStart"
    ON_SESSION_END = "OnSessionEnd"
    ON_TAB_SWITCH = "OnTabSwitch"

    @classmethod
    def parse(cls, name: str | HookEvent) -> HookEvent:
        """Resolve an event identifier, raising UnknownEventError if unknown."""
        if isinstance(name, HookEvent):
            return name
        try:
            return cls(name)
        except ValueError:
            raise UnknownEventError(name) from None

    @property
    def blocks_on_failure(self) -> bool:
        """Whether a failed hook on this event should block the gated operation."""
        return self is HookEvent.PRE_TOOL_USE


EVENT_DESCRIPTIONS: dict[HookEvent, str] = {
    HookEvent.PRE_TOOL_USE: "Before a tool runs; a failing hook blocks the tool call",
    HookEvent.POST_TOOL_USE: "After a tool has run",
    HookEvent.NOTIFICATION: "On notification events",
    HookEvent.STOP: "When the assistant stops",
    HookEvent.SUBAGENT_STOP: "When a sub-agent stops",
    HookEvent.ON_CONTEXT_COMPACT: "When the context is compacted (backup, notification)",
    HookEvent.ON_AGENT_SWITCH: "When switching sub-agents (state transfer)",
    HookEvent.ON_FILE_CHANGE: "When files are modified (auto-save, validation)",
    HookEvent.ON_SESSION_START: "When a session starts (environment setup)",
    HookEvent.ON_SESSION_END: "When a session ends (cleanup, summary)",
    HookEvent.ON_TAB_SWITCH: "When switching tabs (state synchronisation)",
}

EVENT_CATEGORIES: dict[str, tuple[HookEvent, ...]] = {
    "Session Lifecycle": (HookEvent.ON_SESSION_START, HookEvent.ON_SESSION_END),
    "Context Management": (HookEvent.ON_CONTEXT_COMPACT,),
    "Agent Management": (HookEvent.ON_AGENT_SWITCH, HookEvent.SUBAGENT_STOP),
    "User Interface": (HookEvent.ON_TAB_SWITCH,),
    "File System": (HookEvent.ON_FILE_CHANGE,),
    "Tool Usage": (HookEvent.PRE_TOOL_USE, HookEvent.POST_TOOL_USE),
    "System Events": (HookEvent.NOTIFICATION, HookEvent.STOP),
}


@dataclass(frozen=True, slots=True)
class ConditionalTrigger:
    """Gate deciding whether a hook runs for a given context.

    ``priority`` is carried for configuration round-trips only; hooks always
    run in list order.
    """

    condition: str
    enabled: bool = True
    priority: int | None = None

    @classmethod
    def from_dict(cls, data: Any) -> ConditionalTrigger:
        if not isinstance(data, Mapping):
            raise HookConfigError("condition must be an object")
        condition = data.get("condition")
        if not isinstance(condition, str):
            raise HookConfigError("condition.condition must be a string")
        enabled = data.get("enabled")
        if not isinstance(enabled, bool):
            raise HookConfigError("condition.enabled must be a boolean")
        priority = _optional_int(data.get("priority"), "condition.priority", signed=True)
        return cls(condition=condition, enabled=enabled, priority=priority)


@dataclass(frozen=True, slots=True)
class EnhancedHook:
    """A configured shell command bound to an event."""

    command: str
    timeout: int | None = None  # seconds
    retry: int | None = None  # extra attempts after the first
    condition: ConditionalTrigger | None = None
    on_success: tuple[str, ...] = ()
    on_failure: tuple[str, ...] = ()

    @property
    def max_attempts(self) -> int:
        return (self.retry or 0) + 1

    def effective_timeout(self, default: float = DEFAULT_TIMEOUT_SECONDS) -> float:
        return float(self.timeout) if self.timeout is not None else float(default)

    @classmethod
    def from_dict(cls, data: Any) -> EnhancedHook:
        """Build a hook from a raw settings entry.

        Unknown keys are ignored. Raises HookConfigError on malformed input.
        """
        if not isinstance(data, Mapping):
            raise HookConfigError("hook entry must be an object")
        command = data.get("command")
        if not isinstance(command, str):
            raise HookConfigError("hook command must be a string")

        condition = data.get("condition")
        return cls(
            command=command,
            timeout=_optional_int(data.get("timeout"), "timeout"),
            retry=_optional_int(data.get("retry"), "retry"),
            condition=ConditionalTrigger.from_dict(condition) if condition is not None else None,
            on_success=_command_list(data.get("on_success"), "on_success"),
            on_failure=_command_list(data.get("on_failure"), "on_failure"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise back to the settings-file shape, omitting unset fields."""
        out: dict[str, Any] = {"command": self.command}
        if self.timeout is not None:
            out["timeout"] = self.timeout
        if self.retry is not None:
            out["retry"] = self.retry
        if self.condition is not None:
            cond: dict[str, Any] = {
                "condition": self.condition.condition,
                "enabled": self.condition.enabled,
            }
            if self.condition.priority is not None:
                cond["priority"] = self.condition.priority
            out["condition"] = cond
        if self.on_success:
            out["on_success"] = list(self.on_success)
        if self.on_failure:
            out["on_failure"] = list(self.on_failure)
        return out


@dataclass(frozen=True, slots=True)
class HookExecutionResult:
    """Outcome of one hook in a chain."""

    success: bool
    output: str = ""
    error: str | None = None
    execution_time_ms: int = 0
    hook_command: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class HookChainResult:
    """Aggregate outcome of one chain run."""

    event: str
    total_hooks: int
    successful: int
    failed: int
    results: tuple[HookExecutionResult, ...] = field(default_factory=tuple)
    should_continue: bool = True

    @classmethod
    def empty(cls, event: HookEvent | str) -> HookChainResult:
        name = event.value if isinstance(event, HookEvent) else event
        return cls(event=name, total_hooks=0, successful=0, failed=0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "event": self.event,
            "total_hooks": self.total_hooks,
            "successful": self.successful,
            "failed": self.failed,
            "results": [r.to_dict() for r in self.results],
            "should_continue": self.should_continue,
        }


def _optional_int(value: Any, name: str, *, signed: bool = False) -> int | None:
    if value is None:
        return None
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise HookConfigError(f"{name} must be an integer")
    if not signed and value < 0:
        raise HookConfigError(f"{name} must not be negative")
    return value


def _command_list(value: Any, name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise HookConfigError(f"{name} must be a list of strings")
    return tuple(value)
