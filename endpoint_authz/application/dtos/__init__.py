"""Application DTOs: query filters, paging options, partial updates."""

from endpoint_authz.application.dtos.notification_endpoint import (
    FindOptions,
    NotificationEndpointFilter,
    NotificationEndpointUpdate,
)

__all__ = [
    "FindOptions",
    "NotificationEndpointFilter",
    "NotificationEndpointUpdate",
]
