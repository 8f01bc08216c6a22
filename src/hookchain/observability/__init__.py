"""OpenTelemetry-based observability for hookchain."""

from hookchain.observability.exporters import (
    ObservabilityConfig,
    configure_exporters,
    is_configured,
    shutdown,
)
from hookchain.observability.metrics import (
    record_cascade,
    record_chain,
    record_hook_execution,
)
from hookchain.observability.tracing import add_event, get_tracer, span

__all__ = [
    "ObservabilityConfig",
    "add_event",
    "configure_exporters",
    "get_tracer",
    "is_configured",
    "record_cascade",
    "record_chain",
    "record_hook_execution",
    "shutdown",
    "span",
]
