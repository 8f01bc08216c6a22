"""Hook chain execution and aggregation."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from hookchain.errors import HookError
from hookchain.hooks.bus import EventBus, LoggingEventBus, chain_complete_topic
from hookchain.hooks.events import HookContext
from hookchain.hooks.executor import HookExecutor
from hookchain.observability.metrics import record_chain, record_hook_execution
from hookchain.observability.tracing import span
from hookchain.types.hooks import EnhancedHook, HookChainResult, HookEvent, HookExecutionResult

logger = logging.getLogger(__name__)


class HookChainRunner:
    """Runs an ordered list of hooks for one event occurrence.

    Hooks run one after another in list order. ``run`` never raises: a hook
    that errors out is recorded as a failed result and the chain moves on.
    """

    def __init__(
        self,
        executor: HookExecutor | None = None,
        bus: EventBus | None = None,
    ) -> None:
        self._executor = executor or HookExecutor()
        self._bus: EventBus = bus or LoggingEventBus()

    @property
    def executor(self) -> HookExecutor:
        return self._executor

    async def run(
        self,
        event: HookEvent,
        ctx: HookContext,
        hooks: Sequence[EnhancedHook],
    ) -> HookChainResult:
        hooks = tuple(hooks)
        logger.info("Executing hook chain for event %s, %d hooks", event.value, len(hooks))

        results: list[HookExecutionResult] = []
        successful = 0
        failed = 0
        should_continue = True

        with span("hookchain.chain", {
            "hookchain.event": event.value,
            "hookchain.session_id": ctx.session_id,
            "hookchain.total_hooks": len(hooks),
        }) as chain_span:
            for idx, hook in enumerate(hooks, start=1):
                logger.debug("Executing hook %d/%d: %s", idx, len(hooks), hook.command)
                result = await self._run_hook(event, hook, ctx)
                results.append(result)

                if result.success:
                    successful += 1
                    continue
                failed += 1
                if event.blocks_on_failure and should_continue:
                    should_continue = False
                    logger.warning("%s hook failed, blocking operation", event.value)

            chain_span.set_attribute("hookchain.failed", failed)
            chain_span.set_attribute("hookchain.should_continue", should_continue)

        record_chain(event.value, blocked=not should_continue)
        self._notify(ctx.session_id, results)

        return HookChainResult(
            event=event.value,
            total_hooks=len(hooks),
            successful=successful,
            failed=failed,
            results=tuple(results),
            should_continue=should_continue,
        )

    async def _run_hook(
        self, event: HookEvent, hook: EnhancedHook, ctx: HookContext,
    ) -> HookExecutionResult:
        with span("hookchain.hook", {"hookchain.command": hook.command}) as hook_span:
            try:
                result = await self._executor.execute(hook, ctx)
            except HookError as exc:
                logger.error("Hook execution error: %s", exc)
                result = _error_result(hook, str(exc))
            except Exception as exc:
                logger.exception("Unexpected error running hook: %s", hook.command)
                result = _error_result(hook, f"{type(exc).__name__}: {exc}")
            hook_span.set_attribute("hookchain.success", result.success)

        record_hook_execution(event.value, success=result.success, duration_ms=result.execution_time_ms)
        return result

    def _notify(self, session_id: str, results: list[HookExecutionResult]) -> None:
        try:
            self._bus.publish(
                chain_complete_topic(session_id), [r.to_dict() for r in results],
            )
        except Exception:
            logger.warning("Failed to deliver hook chain notification", exc_info=True)


def _error_result(hook: EnhancedHook, message: str) -> HookExecutionResult:
    return HookExecutionResult(
        success=False,
        output="",
        error=message,
        execution_time_ms=0,
        hook_command=hook.command,
    )
