"""Composition root: wires settings, observability, and the endpoint service.

No business logic here, only construction. Callers get the authorizing
decorator; the store behind it is never handed out directly.
"""

import logging

from endpoint_authz.application.services.authorization_service import AuthorizationService
from endpoint_authz.application.services.notification_endpoint_service import (
    AuthorizingNotificationEndpointService,
)
from endpoint_authz.core.config import Settings, get_settings
from endpoint_authz.infrastructure.services.notification_endpoint_store import (
    InMemoryNotificationEndpointService,
)
from endpoint_authz.shared.telemetry.logging import setup_logging
from endpoint_authz.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
)

logger = logging.getLogger(__name__)


def build_notification_endpoint_service(
    settings: Settings | None = None,
) -> AuthorizingNotificationEndpointService:
    """Return an authorizing endpoint service over a fresh in-memory store.

    Args:
        settings: Optional settings; defaults to get_settings().

    Returns:
        The decorator, ready to receive RequestContext-bearing calls.
    """
    settings = settings or get_settings()
    store = InMemoryNotificationEndpointService(
        default_limit=settings.find_default_limit,
        max_limit=settings.find_max_limit,
    )
    return AuthorizingNotificationEndpointService(store, AuthorizationService())


def init_observability(settings: Settings | None = None) -> TelemetryConfig | None:
    """Configure logging and, when enabled, OpenTelemetry tracing.

    With tracing on, log lines also carry the current trace and span ids.

    Returns:
        The registered TelemetryConfig, or None when telemetry is disabled.
    """
    settings = settings or get_settings()
    setup_logging(settings)
    if not settings.telemetry_enabled:
        logger.info("Telemetry disabled")
        return None
    telemetry = TelemetryConfig(settings)
    telemetry.setup()
    telemetry.instrument_logging()
    setup_logging(settings, trace_ids=True)
    set_telemetry(telemetry)
    return telemetry


def shutdown_observability() -> None:
    """Flush and shut down the registered telemetry, if any."""
    telemetry = get_telemetry()
    if telemetry is None:
        return
    # Trace ids disappear from log records once instrumentation is removed.
    setup_logging(telemetry.settings)
    telemetry.shutdown()
    set_telemetry(None)
