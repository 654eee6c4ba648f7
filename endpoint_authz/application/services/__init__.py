"""Application services: permission evaluation and the authorizing endpoint service."""

from endpoint_authz.application.services.authorization_service import AuthorizationService
from endpoint_authz.application.services.notification_endpoint_service import (
    AuthorizingNotificationEndpointService,
)

__all__ = [
    "AuthorizationService",
    "AuthorizingNotificationEndpointService",
]
