"""OpenTelemetry tracer provider for the endpoint authorization service.

Spans come from the authorizing service, one per operation, carrying the
authz.* decision attributes. Exporters: console (local), otlp (collector),
or none (spans are sampled but dropped).
"""

import logging

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased

from endpoint_authz.core.config import Settings

logger = logging.getLogger(__name__)


def build_span_exporter(settings: Settings) -> SpanExporter | None:
    """Return the exporter selected by settings.telemetry_exporter (None for "none")."""
    if settings.telemetry_exporter == "otlp":
        endpoint = settings.telemetry_otlp_endpoint or ""
        return OTLPSpanExporter(
            endpoint=endpoint, insecure=endpoint.startswith("http://")
        )
    if settings.telemetry_exporter == "console":
        return ConsoleSpanExporter()
    return None


class TelemetryConfig:
    """Owns the tracer provider built from Settings.

    setup() installs it as the global provider. instrument_logging() adds
    trace and span ids to log records. shutdown() flushes pending spans and
    removes the logging hook again.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.tracer_provider: TracerProvider | None = None
        self._logging_instrumentor: LoggingInstrumentor | None = None

    def setup(self, exporter: SpanExporter | None = None) -> TracerProvider:
        """Build the provider and register it globally.

        Args:
            exporter: Overrides the exporter named in settings.

        Returns:
            The registered TracerProvider.
        """
        settings = self.settings
        resource = Resource.create(
            {
                SERVICE_NAME: settings.app_name,
                SERVICE_VERSION: settings.app_version,
                "deployment.environment": settings.telemetry_environment,
            }
        )
        provider = TracerProvider(
            resource=resource,
            sampler=ParentBased(TraceIdRatioBased(settings.telemetry_sample_rate)),
        )
        exporter = exporter or build_span_exporter(settings)
        if exporter is not None:
            provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(provider)
        self.tracer_provider = provider
        logger.info(
            "Tracing enabled: service=%s exporter=%s sample_rate=%s",
            settings.app_name,
            settings.telemetry_exporter,
            settings.telemetry_sample_rate,
        )
        return provider

    def instrument_logging(self) -> None:
        """Inject otelTraceID/otelSpanID into every log record."""
        if self.tracer_provider is None or self._logging_instrumentor is not None:
            return
        instrumentor = LoggingInstrumentor()
        instrumentor.instrument(
            tracer_provider=self.tracer_provider, set_logging_format=False
        )
        self._logging_instrumentor = instrumentor

    def shutdown(self) -> None:
        """Flush spans, shut the provider down, and undo logging instrumentation."""
        if self._logging_instrumentor is not None:
            self._logging_instrumentor.uninstrument()
            self._logging_instrumentor = None
        if self.tracer_provider is not None:
            self.tracer_provider.shutdown()
            self.tracer_provider = None
            logger.info("Tracing shut down")


_telemetry: TelemetryConfig | None = None


def get_telemetry() -> TelemetryConfig | None:
    """Return the TelemetryConfig registered at startup, if any."""
    return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    """Register (or clear, with None) the process-wide TelemetryConfig."""
    global _telemetry
    _telemetry = telemetry
