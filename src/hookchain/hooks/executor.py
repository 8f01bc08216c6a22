"""Single-hook execution: condition gate, spawn, timeout, retry, cascades."""

from __future__ import annotations

import asyncio
import logging
import os
import signal
import tempfile
import time
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from hookchain.errors import HookSpawnError, HookTimeoutError
from hookchain.hooks.conditions import should_run
from hookchain.hooks.events import HookContext
from hookchain.observability.metrics import record_cascade
from hookchain.observability.tracing import add_event
from hookchain.types.config import EngineConfig
from hookchain.types.hooks import SKIPPED_OUTPUT, EnhancedHook, HookExecutionResult

logger = logging.getLogger(__name__)

_POSIX = os.name == "posix"


@dataclass(frozen=True, slots=True)
class CascadeOutcome:
    """What happened to one on_success / on_failure command."""

    command: str
    kind: str
    exit_code: int | None
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.exit_code == 0


class HookExecutor:
    """Runs one hook to completion.

    Timeouts raise :class:`HookTimeoutError` and are neither retried nor
    followed by on_failure cascades. Spawn failures raise
    :class:`HookSpawnError`. Non-zero exits are retried ``hook.retry`` times
    with a fixed backoff before the failure is reported as a result.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self._config = config or EngineConfig()

    @property
    def config(self) -> EngineConfig:
        return self._config

    async def execute(self, hook: EnhancedHook, ctx: HookContext) -> HookExecutionResult:
        if not should_run(hook, ctx):
            logger.debug("Hook condition not met, skipping: %s", hook.command)
            return HookExecutionResult(
                success=True,
                output=SKIPPED_OUTPUT,
                execution_time_ms=0,
                hook_command=hook.command,
            )

        start = time.monotonic()
        env = {**os.environ, **ctx.to_env()}
        cwd = _working_dir(ctx)
        timeout = hook.effective_timeout(self._config.default_timeout)
        max_retries = hook.retry or 0
        retries = 0

        while True:
            returncode, stdout, stderr = await self._run_once(hook.command, env, cwd, timeout)
            elapsed_ms = int((time.monotonic() - start) * 1000)

            if returncode == 0:
                await self.run_cascades(hook.on_success, ctx, kind="on_success")
                return HookExecutionResult(
                    success=True,
                    output=stdout,
                    execution_time_ms=elapsed_ms,
                    hook_command=hook.command,
                )

            if retries < max_retries:
                retries += 1
                logger.warning(
                    "Hook failed with exit code %s, retrying (%d/%d): %s",
                    returncode, retries, max_retries, hook.command,
                )
                add_event("hookchain.retry", {"attempt": retries + 1, "exit_code": returncode})
                await asyncio.sleep(self._config.retry_backoff)
                continue

            await self.run_cascades(hook.on_failure, ctx, kind="on_failure")
            return HookExecutionResult(
                success=False,
                output="",
                error=stderr,
                execution_time_ms=elapsed_ms,
                hook_command=hook.command,
            )

    async def _run_once(
        self, command: str, env: dict[str, str], cwd: str | None, timeout: float,
    ) -> tuple[int, str, str]:
        """Spawn *command* once and wait for it. Returns (exit code, stdout, stderr)."""
        try:
            proc = await asyncio.create_subprocess_shell(
                command,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=cwd,
                env=env,
                executable=self._config.shell,
                start_new_session=_POSIX,
            )
        except (OSError, ValueError) as exc:
            raise HookSpawnError(f"Failed to spawn hook process: {exc}") from exc

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
        except TimeoutError:
            logger.warning("Hook timed out after %ss: %s", timeout, command)
            if self._config.kill_on_timeout:
                await _kill(proc)
            raise HookTimeoutError(command, timeout) from None

        return (
            proc.returncode if proc.returncode is not None else -1,
            stdout.decode("utf-8", errors="replace"),
            stderr.decode("utf-8", errors="replace"),
        )

    async def run_cascades(
        self, commands: Sequence[str], ctx: HookContext, *, kind: str,
    ) -> list[CascadeOutcome]:
        """Run cascade commands in order. Failures are reported, never raised."""
        if not commands:
            return []
        env = {**os.environ, **ctx.to_cascade_env()}
        cwd = _working_dir(ctx)
        outcomes: list[CascadeOutcome] = []
        for command in commands:
            outcome = await self._run_cascade(command, kind, env, cwd)
            _report_cascade(outcome)
            outcomes.append(outcome)
        return outcomes

    async def _run_cascade(
        self, command: str, kind: str, env: dict[str, str], cwd: str | None,
    ) -> CascadeOutcome:
        # stderr to a file, not a pipe: backgrounded children may hold it open
        with tempfile.TemporaryFile() as err_file:
            try:
                proc = await asyncio.create_subprocess_shell(
                    command,
                    stdin=asyncio.subprocess.DEVNULL,
                    stdout=asyncio.subprocess.DEVNULL,
                    stderr=err_file,
                    cwd=cwd,
                    env=env,
                    executable=self._config.shell,
                )
                await proc.wait()
            except (OSError, ValueError) as exc:
                return CascadeOutcome(
                    command=command, kind=kind, exit_code=None,
                    error=f"Failed to spawn command: {exc}",
                )
            err_file.seek(0)
            error = err_file.read().decode("utf-8", errors="replace").strip()
        return CascadeOutcome(
            command=command, kind=kind, exit_code=proc.returncode, error=error or None,
        )


def _report_cascade(outcome: CascadeOutcome) -> None:
    if outcome.success:
        logger.info("%s command succeeded: %s", outcome.kind, outcome.command)
    else:
        logger.warning(
            "%s command failed (exit code %s): %s%s",
            outcome.kind, outcome.exit_code, outcome.command,
            f": {outcome.error}" if outcome.error else "",
        )
    record_cascade(outcome.kind, success=outcome.success)
    add_event("hookchain.cascade", {
        "kind": outcome.kind,
        "command": outcome.command,
        "exit_code": outcome.exit_code if outcome.exit_code is not None else -1,
    })


def _working_dir(ctx: HookContext) -> str | None:
    """Run hooks from the project directory when it exists."""
    if ctx.project_path and Path(ctx.project_path).is_dir():
        return ctx.project_path
    return None


async def _kill(proc: asyncio.subprocess.Process) -> None:
    """Kill a timed-out hook and everything in its process group."""
    try:
        if _POSIX:
            os.killpg(proc.pid, signal.SIGKILL)
        else:
            proc.kill()
    except ProcessLookupError:
        return
    await proc.wait()
