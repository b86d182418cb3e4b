# kvapi/shared/telemetry.py
from typing import Optional

import structlog
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from kvapi import __version__
from kvapi.shared.config import Settings, settings as default_settings

logger = structlog.get_logger()

def setup_telemetry(settings: Optional[Settings] = None) -> bool:
    """
    Initializes the OpenTelemetry SDK with OTLP export.
    Returns False (and does nothing) when no exporter endpoint is configured.
    """
    settings = settings or default_settings
    if not settings.OTEL_EXPORTER_OTLP_ENDPOINT:
        logger.info("telemetry_disabled", reason="no OTEL_EXPORTER_OTLP_ENDPOINT")
        return False

    resource = Resource.create(attributes={
        "service.name": settings.OTEL_SERVICE_NAME,
        "deployment.environment": settings.APP_ENV.value,
        "service.version": __version__,
    })

    trace_provider = TracerProvider(resource=resource)
    otlp_exporter = OTLPSpanExporter(endpoint=f"{settings.OTEL_EXPORTER_OTLP_ENDPOINT}/v1/traces")
    trace_provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    if settings.DEBUG:
        trace_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(trace_provider)
    logger.info("telemetry_enabled", service=settings.OTEL_SERVICE_NAME)
    return True

def instrument_fastapi(app, settings: Optional[Settings] = None) -> None:
    """Auto-instruments the FastAPI application to trace incoming HTTP requests."""
    settings = settings or default_settings
    if settings.OTEL_EXPORTER_OTLP_ENDPOINT:
        FastAPIInstrumentor.instrument_app(app)

def get_tracer(name: str):
    return trace.get_tracer(name)
