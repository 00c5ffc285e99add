"""OpenTelemetry tracing for store operations.

Without setup_tracing() the OpenTelemetry API hands out no-op tracers, so
trace_span() costs next to nothing until an OTLP endpoint is configured.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generator

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

TRACER_NAME = "jsondb"

_tracer: trace.Tracer | None = None


def setup_tracing(service_name: str, otlp_endpoint: str) -> trace.Tracer:
    """Export spans to an OTLP collector.

    Args:
        service_name: ``service.name`` resource attribute.
        otlp_endpoint: Collector address, e.g. ``http://localhost:4317``.

    Returns:
        The tracer used by trace_span().
    """
    global _tracer

    from jsondb import __version__

    provider = TracerProvider(
        resource=Resource.create(
            {"service.name": service_name, "service.version": __version__}
        )
    )
    provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True))
    )
    trace.set_tracer_provider(provider)

    _tracer = trace.get_tracer(TRACER_NAME)
    return _tracer


def get_tracer() -> trace.Tracer:
    """Get the module tracer, creating it on first use."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(TRACER_NAME)
    return _tracer


@contextmanager
def trace_span(
    name: str,
    attributes: dict[str, Any] | None = None,
) -> Generator[trace.Span, None, None]:
    """Run the block inside a span named ``name``.

    Exceptions propagate; the span records them and is marked as failed.
    """
    with get_tracer().start_as_current_span(name, attributes=attributes) as span:
        yield span
