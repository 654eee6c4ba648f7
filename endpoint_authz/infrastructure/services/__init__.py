"""Infrastructure services implementing application interfaces."""

from endpoint_authz.infrastructure.services.notification_endpoint_store import (
    InMemoryNotificationEndpointService,
)

__all__ = ["InMemoryNotificationEndpointService"]
