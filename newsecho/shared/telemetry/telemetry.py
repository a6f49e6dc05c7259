"""OpenTelemetry tracing for the NewsEcho API.

Built from Settings at startup when TELEMETRY_ENABLED is set. Spans go to
the console (development) or an OTLP gRPC collector. FastAPI requests, Redis
commands and log records (trace/span ids) are instrumented; service methods
add their own spans through the ``traced`` decorator.
"""

from __future__ import annotations

import logging
import threading

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.instrumentation.redis import RedisInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

from newsecho.core.config import Settings

logger = logging.getLogger(__name__)

# Liveness checks would otherwise dominate the trace volume.
_UNTRACED_URLS = "/api/v1/health"


class TelemetryConfig:
    """Tracer provider plus the instrumentations enabled for this process."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.tracer_provider: TracerProvider | None = None

    def _exporter(self) -> SpanExporter | None:
        kind = self.settings.telemetry_exporter
        endpoint = self.settings.telemetry_otlp_endpoint
        if kind == "none":
            return None
        if kind == "otlp" and endpoint:
            logger.info("Exporting spans over OTLP to %s", endpoint)
            return OTLPSpanExporter(endpoint=endpoint, insecure=endpoint.startswith("http://"))
        if kind != "console":
            logger.warning("Unknown telemetry exporter %r, falling back to console", kind)
        return ConsoleSpanExporter()

    def setup_telemetry(self) -> TracerProvider | None:
        """Create and register the global tracer provider. Returns None on failure."""
        try:
            provider = TracerProvider(
                resource=Resource(
                    attributes={
                        SERVICE_NAME: self.settings.app_name,
                        SERVICE_VERSION: self.settings.app_version,
                        "deployment.environment": self.settings.telemetry_environment,
                    }
                ),
                sampler=TraceIdRatioBased(self.settings.telemetry_sample_rate),
            )
            exporter = self._exporter()
            if exporter is not None:
                provider.add_span_processor(BatchSpanProcessor(exporter))
            trace.set_tracer_provider(provider)
        except Exception:
            logger.exception("Failed to initialize telemetry; tracing disabled")
            return None
        self.tracer_provider = provider
        logger.info(
            "Telemetry started for %s %s (exporter=%s)",
            self.settings.app_name,
            self.settings.app_version,
            self.settings.telemetry_exporter,
        )
        return provider

    def instrument(self, app: FastAPI, *, redis: bool = False) -> None:
        """Attach FastAPI, logging and (optionally) Redis instrumentation."""
        if self.tracer_provider is None:
            return
        try:
            FastAPIInstrumentor.instrument_app(
                app, tracer_provider=self.tracer_provider, excluded_urls=_UNTRACED_URLS
            )
            LoggingInstrumentor().instrument(
                tracer_provider=self.tracer_provider, set_logging_format=True
            )
            if redis:
                RedisInstrumentor().instrument(tracer_provider=self.tracer_provider)
        except Exception:
            logger.exception("Failed to instrument application for tracing")

    def shutdown(self) -> None:
        """Flush pending spans and stop the provider."""
        if self.tracer_provider is None:
            return
        try:
            self.tracer_provider.shutdown()
        except Exception:
            logger.exception("Error flushing spans on shutdown")
        self.tracer_provider = None


_telemetry: TelemetryConfig | None = None
_telemetry_lock = threading.RLock()


def get_telemetry() -> TelemetryConfig | None:
    with _telemetry_lock:
        return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    global _telemetry
    with _telemetry_lock:
        _telemetry = telemetry
