import logging
from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.sdk.resources import Resource, SERVICE_NAME, SERVICE_VERSION
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
    SpanProcessor,
)
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor  # type: ignore

from src.config import Settings

logger = logging.getLogger(__name__)

# Healthcheck requests are not traced.
UNTRACED_URLS = "healthcheck"


def create_span_processor(exporter: str) -> SpanProcessor:
    if exporter == "otlp":
        return BatchSpanProcessor(OTLPSpanExporter())
    elif exporter == "console":
        return SimpleSpanProcessor(ConsoleSpanExporter())
    else:
        raise ValueError(f"Unsupported trace exporter: {exporter}")


def setup_tracing(settings: Settings, app: FastAPI) -> TracerProvider:
    logger.info(f"Setting up tracing with the {settings.OTEL_TRACES_EXPORTER} exporter")

    resource = Resource(
        attributes={
            SERVICE_NAME: settings.OTEL_SERVICE_NAME,
            SERVICE_VERSION: settings.TINYWIKI_VERSION,
        }
    )
    tracer_provider = TracerProvider(resource=resource)
    tracer_provider.add_span_processor(
        create_span_processor(settings.OTEL_TRACES_EXPORTER)
    )
    trace.set_tracer_provider(tracer_provider)

    FastAPIInstrumentor.instrument_app(  # type: ignore
        app,
        tracer_provider=tracer_provider,
        excluded_urls=UNTRACED_URLS,
    )
    logger.info("FastAPI Instrumentation enabled.")

    return tracer_provider
