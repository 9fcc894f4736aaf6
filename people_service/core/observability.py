"""OpenTelemetry initialization helpers for the people service."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SpanExporter

from people_service.core.config import Settings

logger = logging.getLogger(__name__)
_TRACING_INITIALIZED = False


def setup_tracing(settings: Settings, app: Optional[FastAPI] = None) -> None:
    """Configure the global tracer provider and instrument `app` if given."""

    global _TRACING_INITIALIZED
    if not _TRACING_INITIALIZED:
        resource = Resource.create(
            {
                "service.name": settings.API_TITLE.lower().replace(" ", "-"),
                "service.version": settings.API_VERSION,
            }
        )

        provider = TracerProvider(resource=resource)
        exporter = _select_exporter(settings)
        provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(provider)

        _TRACING_INITIALIZED = True
        logger.info("OpenTelemetry tracing initialized with %s exporter", exporter.__class__.__name__)

    if app is not None:
        FastAPIInstrumentor.instrument_app(app)


def _select_exporter(settings: Settings) -> SpanExporter:
    if settings.OTEL_EXPORTER_OTLP_ENDPOINT:
        return OTLPSpanExporter(endpoint=settings.OTEL_EXPORTER_OTLP_ENDPOINT)
    return ConsoleSpanExporter()
