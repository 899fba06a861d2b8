"""OpenTelemetry setup for Engagespot requests.

Only the httpx client owned by ``Engagespot`` is instrumented; other httpx
clients in the host process are left untouched.
"""

import logging

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # type: ignore[attr-defined]
    OTLPSpanExporter as OTLPGrpcExporter,
)
from opentelemetry.exporter.otlp.proto.http.trace_exporter import (  # type: ignore[attr-defined]
    OTLPSpanExporter as OTLPHttpExporter,
)
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, SpanExporter
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased
from opentelemetry.trace import TracerProvider as APITracerProvider

from .config import EngagespotSettings

_LOGGER = logging.getLogger(__name__)


def _span_exporter(settings: EngagespotSettings) -> SpanExporter | None:
    if settings.tracing_endpoint is None:
        return None
    if settings.tracing_protocol == "grpc":
        return OTLPGrpcExporter(endpoint=settings.tracing_endpoint, insecure=settings.tracing_insecure)
    return OTLPHttpExporter(endpoint=settings.tracing_endpoint)


def configure_tracing(settings: EngagespotSettings) -> APITracerProvider | None:
    """Return the tracer provider Engagespot requests should report to.

    An SDK provider already installed by the host application is reused.
    Otherwise a provider exporting to ``tracing_endpoint`` is created and
    installed globally. Returns ``None`` when tracing is disabled.
    """

    if not settings.enable_tracing:
        return None

    current = trace.get_tracer_provider()
    if isinstance(current, TracerProvider):
        return current

    provider = TracerProvider(
        resource=Resource.create({"service.name": settings.service_name}),
        sampler=TraceIdRatioBased(settings.tracing_sample_rate),
    )
    exporter = _span_exporter(settings)
    if exporter is None:
        _LOGGER.warning(
            "Tracing is enabled for %s but no OTLP endpoint is configured; spans will not be exported.",
            settings.service_name,
        )
    else:
        provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)
    return trace.get_tracer_provider()
