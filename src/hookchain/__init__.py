"""hookchain: event-driven hook chains for coding-assistant lifecycle events.

Usage:
    import hookchain

    ctx = hookchain.build_hook_context(
        hookchain.HookEvent.ON_SESSION_START,
        session_id="abc123",
        project_path="/path/to/project",
    )
    result = await hookchain.trigger_hook_event("OnSessionStart", ctx)
    if not result.should_continue:
        ...
"""

from hookchain.core.engine import HookService, test_hook_condition, trigger_hook_event
from hookchain.errors import (
    ConfigLoadError,
    HookConfigError,
    HookError,
    HookSpawnError,
    HookTimeoutError,
    UnknownEventError,
)
from hookchain.hooks.bus import InMemoryEventBus, LoggingEventBus
from hookchain.hooks.chain import HookChainRunner
from hookchain.hooks.conditions import evaluate_condition
from hookchain.hooks.events import HookContext, build_hook_context
from hookchain.hooks.executor import HookExecutor
from hookchain.hooks.manager import HookRegistry
from hookchain.types.config import EngineConfig
from hookchain.types.hooks import (
    ConditionalTrigger,
    EnhancedHook,
    HookChainResult,
    HookEvent,
    HookExecutionResult,
)

__version__ = "0.1.0"

__all__ = [
    # Core API
    "HookService",
    "test_hook_condition",
    "trigger_hook_event",
    # Engine
    "HookChainRunner",
    "HookExecutor",
    "HookRegistry",
    "evaluate_condition",
    # Notification buses
    "InMemoryEventBus",
    "LoggingEventBus",
    # Types
    "ConditionalTrigger",
    "EngineConfig",
    "EnhancedHook",
    "HookChainResult",
    "HookContext",
    "HookEvent",
    "HookExecutionResult",
    "build_hook_context",
    # Errors
    "ConfigLoadError",
    "HookConfigError",
    "HookError",
    "HookSpawnError",
    "HookTimeoutError",
    "UnknownEventError",
]
