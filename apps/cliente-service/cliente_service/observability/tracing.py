"""OpenTelemetry Tracing Setup."""

import os
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.semconv.resource import ResourceAttributes

from .. import __version__

_tracer = None


def init_tracing(
    service_name: str = "cliente-service",
    otlp_endpoint: str = None,
    environment: str = None,
    enabled: bool = True,
) -> None:
    """Initialize OpenTelemetry tracing.

    When disabled, spans go to the no-op tracer provider.
    """
    global _tracer

    if not enabled:
        _tracer = trace.get_tracer(service_name)
        return

    otlp_endpoint = otlp_endpoint or os.getenv(
        "OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4317"
    )

    resource = Resource.create({
        ResourceAttributes.SERVICE_NAME: service_name,
        ResourceAttributes.SERVICE_VERSION: __version__,
        ResourceAttributes.DEPLOYMENT_ENVIRONMENT: environment or os.getenv("ENVIRONMENT", "development"),
    })

    provider = TracerProvider(resource=resource)

    exporter = OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True)
    processor = BatchSpanProcessor(exporter)
    provider.add_span_processor(processor)

    trace.set_tracer_provider(provider)
    _tracer = trace.get_tracer(service_name)


def get_tracer():
    """Get the configured tracer, falling back to the global provider."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer("cliente-service")
    return _tracer
