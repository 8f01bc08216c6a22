"""Exception hierarchy for hookchain."""

from __future__ import annotations


class HookError(Exception):
    """Base class for errors raised while running a single hook."""


class HookSpawnError(HookError):
    """The hook process could not be created."""


class HookTimeoutError(HookError):
    """The hook did not exit before its deadline."""

    def __init__(self, command: str, timeout: float) -> None:
        super().__init__(f"Hook execution timeout after {timeout:g}s: {command}")
        self.command = command
        self.timeout = timeout


class UnknownEventError(ValueError):
    """An event identifier is not part of the event catalog."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown hook event: {name}")
        self.name = name


class HookConfigError(ValueError):
    """A hook definition entry is malformed."""


class ConfigLoadError(Exception):
    """A hook settings file could not be read or parsed."""
