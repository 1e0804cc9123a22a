"""Optional OpenTelemetry tracing for the map pipeline.

Environment Variables:
    GEDCOM_MAP_TRACING: Set to 'true' to enable tracing (default: false)
    OTEL_EXPORTER_OTLP_ENDPOINT: OTLP/HTTP collector URL (default: http://localhost:4318)
    OTEL_SERVICE_NAME: Service name reported with spans (default: gedcom-map)
"""

import os

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor


def is_tracing_enabled() -> bool:
    """Check if tracing is enabled via environment variable."""
    return os.getenv("GEDCOM_MAP_TRACING", "false").lower() == "true"


def get_otlp_endpoint() -> str:
    """Get the OTLP collector endpoint."""
    return os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4318")


def get_service_name() -> str:
    return os.getenv("OTEL_SERVICE_NAME", "gedcom-map")


_tracer_provider: TracerProvider | None = None


def initialize_tracing() -> TracerProvider | None:
    """Initialize OpenTelemetry tracing.

    Returns:
        TracerProvider if tracing is enabled, None otherwise.
    """
    global _tracer_provider

    if not is_tracing_enabled():
        return None

    if _tracer_provider is not None:
        return _tracer_provider

    exporter = OTLPSpanExporter(endpoint=f"{get_otlp_endpoint()}/v1/traces")

    _tracer_provider = TracerProvider(resource=Resource.create({SERVICE_NAME: get_service_name()}))
    _tracer_provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(_tracer_provider)

    return _tracer_provider


def get_tracer(name: str = "gedcom-map") -> trace.Tracer:
    """Get a tracer instance (no-op if tracing disabled)."""
    return trace.get_tracer(name)
