"""OTel provider setup for hook chain telemetry."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from opentelemetry import metrics, trace
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import (
    ConsoleMetricExporter,
    MetricExporter,
    PeriodicExportingMetricReader,
)
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SpanExporter

logger = logging.getLogger(__name__)

EXPORTERS = ("console", "otlp", "none")

_tracer_provider: TracerProvider | None = None
_meter_provider: MeterProvider | None = None


@dataclass(frozen=True, slots=True)
class ObservabilityConfig:
    """Where hook spans and metrics are sent."""

    enabled: bool = False
    exporter: str = "console"  # console | otlp | none
    otlp_endpoint: str = "http://localhost:4317"
    service_name: str = "hookchain"


def _span_exporter(config: ObservabilityConfig) -> SpanExporter:
    if config.exporter == "otlp":
        try:
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
        except ImportError:
            logger.warning("OTLP exporter not installed (pip install hookchain[otlp]); using console")
        else:
            return OTLPSpanExporter(endpoint=config.otlp_endpoint)
    return ConsoleSpanExporter()


def _metric_exporter(config: ObservabilityConfig) -> MetricExporter:
    if config.exporter == "otlp":
        try:
            from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
        except ImportError:
            pass
        else:
            return OTLPMetricExporter(endpoint=config.otlp_endpoint)
    return ConsoleMetricExporter()


def configure_exporters(config: ObservabilityConfig) -> bool:
    """Install global tracer and meter providers for *config*.

    Returns False, installing nothing, when telemetry is disabled or was
    already configured in this process.
    """
    global _tracer_provider, _meter_provider

    if not config.enabled or config.exporter == "none":
        return False
    if _tracer_provider is not None:
        return False

    resource = Resource.create({"service.name": config.service_name})

    tp = TracerProvider(resource=resource)
    tp.add_span_processor(BatchSpanProcessor(_span_exporter(config)))
    trace.set_tracer_provider(tp)
    _tracer_provider = tp

    reader = PeriodicExportingMetricReader(_metric_exporter(config))
    mp = MeterProvider(resource=resource, metric_readers=[reader])
    metrics.set_meter_provider(mp)
    _meter_provider = mp

    logger.debug("Telemetry enabled: exporter=%s service=%s", config.exporter, config.service_name)
    return True


def is_configured() -> bool:
    return _tracer_provider is not None


def shutdown() -> None:
    """Flush and shut down the providers installed by :func:`configure_exporters`."""
    global _tracer_provider, _meter_provider

    providers: list[Any] = [_tracer_provider, _meter_provider]
    _tracer_provider = None
    _meter_provider = None
    for provider in providers:
        if provider is not None:
            provider.shutdown()
