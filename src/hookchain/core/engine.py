"""HookService: composition root and command surface."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from hookchain.core.config import load_engine_config, load_observability_config
from hookchain.core.store import SettingsHookStore, parse_event_hooks
from hookchain.hooks.bus import EventBus
from hookchain.hooks.chain import HookChainRunner
from hookchain.hooks.conditions import evaluate_condition
from hookchain.hooks.events import HookContext
from hookchain.hooks.executor import HookExecutor
from hookchain.hooks.manager import HookRegistry
from hookchain.observability.exporters import configure_exporters
from hookchain.types.config import EngineConfig
from hookchain.types.hooks import EnhancedHook, HookChainResult, HookEvent

logger = logging.getLogger(__name__)

ContextLike = HookContext | Mapping[str, Any]


class HookService:
    """Owns the engine pieces an application needs to trigger hooks.

    Hooks can come from two places: the settings store, read on every
    :meth:`trigger_hook_event` call, or the in-memory :attr:`registry` for
    hooks registered in code.
    """

    def __init__(
        self,
        *,
        config: EngineConfig | None = None,
        store: SettingsHookStore | None = None,
        bus: EventBus | None = None,
        executor: HookExecutor | None = None,
    ) -> None:
        self._config = config or EngineConfig()
        self._executor = executor or HookExecutor(self._config)
        self._runner = HookChainRunner(self._executor, bus)
        self._store = store or SettingsHookStore(settings_dir=self._config.settings_dir)
        self.registry = HookRegistry(self._runner)

    @classmethod
    def from_config(cls, cwd: str | None = None, *, bus: EventBus | None = None) -> HookService:
        """Build a service from ``.hookchain/config.toml`` and the environment."""
        return cls(config=load_engine_config(cwd), bus=bus)

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def store(self) -> SettingsHookStore:
        return self._store

    @property
    def runner(self) -> HookChainRunner:
        return self._runner

    def load_hooks(
        self, event: HookEvent, project_path: str, *, scope: str = "project",
    ) -> list[EnhancedHook]:
        """Load the configured hooks for *event*. Malformed entries are dropped."""
        config = self._store.load(scope, project_path)
        return parse_event_hooks(config, event.value)

    async def trigger_hook_event(self, event_name: str, context: ContextLike) -> HookChainResult:
        """Resolve *event_name*, load its hooks from the store and run them.

        Raises UnknownEventError for an unknown event and ConfigLoadError if
        the settings cannot be read; hook failures are reported in the result.
        """
        event = HookEvent.parse(event_name)
        ctx = _as_context(context)
        hooks = self.load_hooks(event, ctx.project_path)
        return await self._runner.run(event, ctx, hooks)

    def test_hook_condition(self, condition: str, context: ContextLike) -> bool:
        """Evaluate a condition expression, for interactive testing."""
        return evaluate_condition(condition, _as_context(context))


async def trigger_hook_event(
    event_name: str,
    context: ContextLike,
    *,
    bus: EventBus | None = None,
) -> HookChainResult:
    """Trigger *event_name* with a service configured for the context's project."""
    ctx = _as_context(context)
    service = HookService.from_config(ctx.project_path or None, bus=bus)
    return await service.trigger_hook_event(event_name, ctx)


def test_hook_condition(condition: str, context: ContextLike) -> bool:
    """Evaluate *condition* against *context*."""
    return evaluate_condition(condition, _as_context(context))


def _as_context(context: ContextLike) -> HookContext:
    if isinstance(context, HookContext):
        return context
    return HookContext.from_dict(context)


def init_observability(cwd: str | None = None) -> bool:
    """Install OTel exporters when ``[observability]`` enables them.

    Returns True if providers were installed. Pair with
    :func:`hookchain.observability.shutdown` to flush on exit.
    """
    configured = configure_exporters(load_observability_config(cwd))
    if configured:
        logger.debug("Observability configured for %s", cwd or "current directory")
    return configured
