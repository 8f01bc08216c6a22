"""Tracer and span helpers."""

from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from opentelemetry import trace

TRACER_NAME = "hookchain"


def get_tracer(name: str = TRACER_NAME) -> trace.Tracer:
    """Return an OTel Tracer (no-op until a provider is configured)."""
    return trace.get_tracer(name)


@contextmanager
def span(
    name: str,
    attributes: dict[str, Any] | None = None,
) -> Generator[trace.Span, None, None]:
    """Context manager that creates a span as the current span."""
    with get_tracer().start_as_current_span(name, attributes=attributes) as s:
        yield s


def add_event(name: str, attributes: dict[str, Any] | None = None) -> None:
    """Attach an event to the current span, if any."""
    trace.get_current_span().add_event(name, attributes=attributes or {})
