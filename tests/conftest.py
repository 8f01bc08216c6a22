"""Test fixtures including ScriptedExecutor for deterministic chain tests."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest

from hookchain.hooks.bus import InMemoryEventBus
from hookchain.hooks.events import HookContext
from hookchain.hooks.executor import HookExecutor
from hookchain.types.config import EngineConfig
from hookchain.types.hooks import EnhancedHook, HookExecutionResult


@dataclass
class ScriptedOutcome:
    """What ScriptedExecutor should do for one hook call.

    Set ``raises`` to make the call raise instead of returning a result.
    """

    success: bool = True
    output: str = "ok"
    error: str | None = None
    raises: BaseException | None = None


class ScriptedExecutor(HookExecutor):
    """An executor that returns scripted outcomes instead of spawning processes."""

    def __init__(self, outcomes: list[ScriptedOutcome] | None = None) -> None:
        super().__init__(EngineConfig(retry_backoff=0))
        self._outcomes = list(outcomes or [])
        self._calls: list[tuple[EnhancedHook, HookContext]] = []

    async def execute(self, hook: EnhancedHook, ctx: HookContext) -> HookExecutionResult:
        self._calls.append((hook, ctx))
        outcome = self._outcomes.pop(0) if self._outcomes else ScriptedOutcome()
        if outcome.raises is not None:
            raise outcome.raises
        return HookExecutionResult(
            success=outcome.success,
            output=outcome.output if outcome.success else "",
            error=outcome.error,
            execution_time_ms=1,
            hook_command=hook.command,
        )

    @property
    def calls(self) -> list[tuple[EnhancedHook, HookContext]]:
        return self._calls


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME at a temp dir and drop HOOKCHAIN_* and OTEL_* overrides."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for key in [k for k in os.environ if k.startswith(("HOOKCHAIN_", "OTEL_"))]:
        monkeypatch.delenv(key, raising=False)
    return home


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """An empty project directory."""
    path = tmp_path / "project"
    path.mkdir()
    return path


def write_settings(project: Path, hooks: dict[str, Any], *, name: str = "settings.json") -> Path:
    """Write a settings file with the given hooks mapping."""
    settings_dir = project / ".claude"
    settings_dir.mkdir(exist_ok=True)
    path = settings_dir / name
    path.write_text(json.dumps({"hooks": hooks}))
    return path


@pytest.fixture
def ctx(project: Path) -> HookContext:
    return HookContext(
        event="OnSessionStart",
        session_id="sess-1",
        project_path=str(project),
        data={"tokens": 1200},
    )


@pytest.fixture
def fast_executor() -> HookExecutor:
    """A real executor without retry backoff."""
    return HookExecutor(EngineConfig(retry_backoff=0))


@pytest.fixture
def bus() -> InMemoryEventBus:
    return InMemoryEventBus()
