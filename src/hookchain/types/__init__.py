"""Type definitions for hookchain."""

from hookchain.types.config import EngineConfig
from hookchain.types.hooks import (
    EVENT_CATEGORIES,
    EVENT_DESCRIPTIONS,
    ConditionalTrigger,
    EnhancedHook,
    HookChainResult,
    HookEvent,
    HookExecutionResult,
)

__all__ = [
    "EVENT_CATEGORIES",
    "EVENT_DESCRIPTIONS",
    "ConditionalTrigger",
    "EngineConfig",
    "EnhancedHook",
    "HookChainResult",
    "HookEvent",
    "HookExecutionResult",
]
