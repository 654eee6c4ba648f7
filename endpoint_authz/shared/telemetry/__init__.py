"""Shared telemetry: log output, tracer provider, and span helpers."""

from endpoint_authz.shared.telemetry.logging import setup_logging
from endpoint_authz.shared.telemetry.telemetry import (
    TelemetryConfig,
    build_span_exporter,
    get_telemetry,
    set_telemetry,
)
from endpoint_authz.shared.telemetry.tracing import (
    add_span_attributes,
    add_span_event,
    traced,
)

__all__ = [
    "setup_logging",
    "TelemetryConfig",
    "build_span_exporter",
    "get_telemetry",
    "set_telemetry",
    "traced",
    "add_span_attributes",
    "add_span_event",
]
