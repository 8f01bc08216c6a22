"""Programmatic hook registry."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from hookchain.hooks.chain import HookChainRunner
from hookchain.hooks.events import HookContext
from hookchain.types.hooks import EnhancedHook, HookChainResult, HookEvent

logger = logging.getLogger(__name__)


class HookRegistry:
    """Maps events to ordered hook lists and triggers them.

    The lock guards the mapping only; it is released before any hook runs,
    so concurrent triggers and registrations never wait on a running chain.
    """

    def __init__(self, runner: HookChainRunner | None = None) -> None:
        self._runner = runner or HookChainRunner()
        self._hooks: dict[HookEvent, tuple[EnhancedHook, ...]] = {}
        self._lock = threading.Lock()

    def register(self, event: HookEvent | str, hooks: Iterable[EnhancedHook]) -> None:
        """Replace the hook list for *event*."""
        event = HookEvent.parse(event)
        snapshot = tuple(hooks)
        with self._lock:
            self._hooks[event] = snapshot
        logger.debug("Registered %d hooks for %s", len(snapshot), event.value)

    def get(self, event: HookEvent | str) -> tuple[EnhancedHook, ...]:
        event = HookEvent.parse(event)
        with self._lock:
            return self._hooks.get(event, ())

    def events(self) -> list[HookEvent]:
        """Events with at least one registered hook."""
        with self._lock:
            return [e for e, hooks in self._hooks.items() if hooks]

    def clear(self, event: HookEvent | str | None = None) -> None:
        """Drop the hooks for *event*, or for every event when None."""
        with self._lock:
            if event is None:
                self._hooks.clear()
            else:
                self._hooks.pop(HookEvent.parse(event), None)

    async def trigger(self, event: HookEvent | str, ctx: HookContext) -> HookChainResult:
        """Run the hooks registered for *event*."""
        event = HookEvent.parse(event)
        hooks = self.get(event)
        if not hooks:
            logger.debug("No hooks registered for event: %s", event.value)
            return HookChainResult.empty(event)
        return await self._runner.run(event, ctx, hooks)
