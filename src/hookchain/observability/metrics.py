"""Metrics recording for hook and cascade executions."""

from __future__ import annotations

from typing import Any

from opentelemetry import metrics

# Lazily-created instruments
_meter: Any = None
_hook_counter: Any = None
_cascade_counter: Any = None
_chain_counter: Any = None
_duration_histogram: Any = None


def _ensure_instruments() -> None:
    """Create meter and instruments on first use."""
    global _meter, _hook_counter, _cascade_counter, _chain_counter, _duration_histogram

    if _meter is not None:
        return

    _meter = metrics.get_meter("hookchain")
    _hook_counter = _meter.create_counter(
        "hookchain.hook_executions",
        description="Hooks executed, by event and outcome",
    )
    _cascade_counter = _meter.create_counter(
        "hookchain.cascades",
        description="on_success / on_failure commands executed",
    )
    _chain_counter = _meter.create_counter(
        "hookchain.chains",
        description="Hook chains executed",
    )
    _duration_histogram = _meter.create_histogram(
        "hookchain.hook_duration",
        description="Hook wall-clock duration including retries",
        unit="ms",
    )


def record_hook_execution(event: str, *, success: bool, duration_ms: int) -> None:
    """Record one hook outcome."""
    _ensure_instruments()
    attrs = {"event": event, "success": str(success).lower()}
    _hook_counter.add(1, attrs)
    _duration_histogram.record(duration_ms, attrs)


def record_cascade(kind: str, *, success: bool) -> None:
    """Record one cascade command outcome (``kind`` is on_success/on_failure)."""
    _ensure_instruments()
    _cascade_counter.add(1, {"kind": kind, "success": str(success).lower()})


def record_chain(event: str, *, blocked: bool) -> None:
    """Record a completed chain."""
    _ensure_instruments()
    _chain_counter.add(1, {"event": event, "blocked": str(blocked).lower()})


def reset_instruments() -> None:
    """Reset module-level instruments. Useful for test isolation."""
    global _meter, _hook_counter, _cascade_counter, _chain_counter, _duration_histogram
    _meter = None
    _hook_counter = None
    _cascade_counter = None
    _chain_counter = None
    _duration_histogram = None
