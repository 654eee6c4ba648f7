"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP). The
authorizing decorator and the authoritative store both implement
INotificationEndpointService, so either can stand in for the other.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from endpoint_authz.application.dtos.notification_endpoint import (
        FindOptions,
        NotificationEndpointFilter,
        NotificationEndpointUpdate,
    )
    from endpoint_authz.core.context import RequestContext
    from endpoint_authz.domain.entities.notification_endpoint import NotificationEndpoint
    from endpoint_authz.domain.value_objects.core import SecretField
    from endpoint_authz.domain.value_objects.permission import Permission


# Authorizer interface
class IAuthorizer(Protocol):
    """Protocol for a caller's permission set (API token, session)."""

    def allowed(self, permission: Permission, at: datetime | None = None) -> bool:
        """Return True if a held permission covers the required one at time at."""

    def identifier(self) -> str:
        """Return the authorizer's own id (token or session id)."""

    def get_user_id(self) -> str:
        """Return the id of the user the authorizer acts for."""

    def kind(self) -> str:
        """Return a short label for logs (e.g. 'authorization', 'session')."""


# Notification endpoint service interface
class INotificationEndpointService(Protocol):
    """Protocol for notification endpoint CRUD."""

    async def find_notification_endpoint_by_id(
        self, ctx: RequestContext, id: str
    ) -> NotificationEndpoint:
        """Return endpoint by ID. Raises ResourceNotFoundException if absent."""

    async def find_notification_endpoints(
        self,
        ctx: RequestContext,
        filter: NotificationEndpointFilter,
        *opts: FindOptions,
    ) -> tuple[list[NotificationEndpoint], int]:
        """Return endpoints matching filter and their count."""

    async def create_notification_endpoint(
        self,
        ctx: RequestContext,
        endpoint: NotificationEndpoint,
        user_id: str,
    ) -> None:
        """Persist a new endpoint owned by user_id (sets id and timestamps)."""

    async def update_notification_endpoint(
        self,
        ctx: RequestContext,
        id: str,
        endpoint: NotificationEndpoint,
        user_id: str,
    ) -> NotificationEndpoint:
        """Replace endpoint configuration; return the stored endpoint."""

    async def patch_notification_endpoint(
        self,
        ctx: RequestContext,
        id: str,
        update: NotificationEndpointUpdate,
    ) -> NotificationEndpoint:
        """Apply a partial update; return the stored endpoint."""

    async def delete_notification_endpoint(
        self, ctx: RequestContext, id: str
    ) -> tuple[list[SecretField], str]:
        """Delete endpoint; return its secret fields and id."""
