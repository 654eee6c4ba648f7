"""Application interfaces (ports): Protocols implemented by infrastructure."""

from endpoint_authz.application.interfaces.services import (
    IAuthorizer,
    INotificationEndpointService,
)

__all__ = [
    "IAuthorizer",
    "INotificationEndpointService",
]
