"""Authorizing notification endpoint service.

Wraps any INotificationEndpointService and checks the request's authorizer
before every call reaches it. Single-item operations fail closed; collection
reads drop the items the caller may not read.

Writes on an existing endpoint never trust the org/id the caller supplies:
the endpoint is fetched (itself a checked read) and the write permission is
built from the stored org and id. Create is the exception, since nothing is
stored yet and the declared org is the one being written to.
"""

from __future__ import annotations

import logging

from endpoint_authz.application.dtos.notification_endpoint import (
    FindOptions,
    NotificationEndpointFilter,
    NotificationEndpointUpdate,
)
from endpoint_authz.application.interfaces.services import INotificationEndpointService
from endpoint_authz.application.services.authorization_service import AuthorizationService
from endpoint_authz.core.context import RequestContext, get_authorizer
from endpoint_authz.domain.entities.notification_endpoint import NotificationEndpoint
from endpoint_authz.domain.enums import ResourceType
from endpoint_authz.domain.exceptions import UnauthorizedException
from endpoint_authz.domain.value_objects.core import SecretField
from endpoint_authz.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)

_RESOURCE_TYPE = ResourceType.NOTIFICATION_ENDPOINTS


class AuthorizingNotificationEndpointService:
    """INotificationEndpointService decorator that enforces read/write permissions.

    Same method surface as the wrapped service, so callers can be pointed at
    either one without changes.
    """

    def __init__(
        self,
        inner: INotificationEndpointService,
        authorization_service: AuthorizationService | None = None,
    ) -> None:
        self._inner = inner
        self._authz = authorization_service or AuthorizationService()

    @traced("notification_endpoint.find_by_id")
    async def find_notification_endpoint_by_id(
        self, ctx: RequestContext, id: str
    ) -> NotificationEndpoint:
        """Return the endpoint if the caller can read it."""
        get_authorizer(ctx)
        endpoint = await self._inner.find_notification_endpoint_by_id(ctx, id)
        self._authz.authorize_read(ctx, _RESOURCE_TYPE, endpoint.org_id, endpoint.id)
        return endpoint

    @traced("notification_endpoint.find_many")
    async def find_notification_endpoints(
        self,
        ctx: RequestContext,
        filter: NotificationEndpointFilter,
        *opts: FindOptions,
    ) -> tuple[list[NotificationEndpoint], int]:
        """Return the readable subset of endpoints matching filter, and its size.

        Raises:
            UnauthorizedException: If filter names neither an org nor a user.
            EndpointAuthzException: Any non-authorization error from a per-item
                check aborts the whole read.
        """
        get_authorizer(ctx)
        # Unscoped reads would load the entire collection before any check.
        if not filter.is_scoped():
            raise UnauthorizedException(
                "cannot process a request without a org or user filter"
            )

        # TODO: push the read check into the store query once it can take an authorizer.
        endpoints, _ = await self._inner.find_notification_endpoints(ctx, filter, *opts)

        readable: list[NotificationEndpoint] = []
        for endpoint in endpoints:
            try:
                self._authz.authorize_read(
                    ctx, _RESOURCE_TYPE, endpoint.org_id, endpoint.id
                )
            except UnauthorizedException:
                continue
            readable.append(endpoint)

        dropped = len(endpoints) - len(readable)
        add_span_attributes(**{"authz.filtered": dropped})
        if dropped:
            logger.debug(
                "Filtered %d unreadable notification endpoints (request_id=%s)",
                dropped,
                ctx.request_id,
            )
        return readable, len(readable)

    @traced("notification_endpoint.create")
    async def create_notification_endpoint(
        self,
        ctx: RequestContext,
        endpoint: NotificationEndpoint,
        user_id: str,
    ) -> None:
        """Create the endpoint if the caller can write endpoints in its org."""
        get_authorizer(ctx)
        self._authz.authorize_write_org(ctx, _RESOURCE_TYPE, endpoint.org_id)
        await self._inner.create_notification_endpoint(ctx, endpoint, user_id)

    @traced("notification_endpoint.update")
    async def update_notification_endpoint(
        self,
        ctx: RequestContext,
        id: str,
        endpoint: NotificationEndpoint,
        user_id: str,
    ) -> NotificationEndpoint:
        """Replace the endpoint if the caller can read and write the stored one."""
        await self._authorize_write_existing(ctx, id)
        return await self._inner.update_notification_endpoint(ctx, id, endpoint, user_id)

    @traced("notification_endpoint.patch")
    async def patch_notification_endpoint(
        self,
        ctx: RequestContext,
        id: str,
        update: NotificationEndpointUpdate,
    ) -> NotificationEndpoint:
        """Patch the endpoint if the caller can read and write the stored one."""
        await self._authorize_write_existing(ctx, id)
        return await self._inner.patch_notification_endpoint(ctx, id, update)

    @traced("notification_endpoint.delete")
    async def delete_notification_endpoint(
        self, ctx: RequestContext, id: str
    ) -> tuple[list[SecretField], str]:
        """Delete the endpoint if the caller can read and write the stored one."""
        await self._authorize_write_existing(ctx, id)
        return await self._inner.delete_notification_endpoint(ctx, id)

    async def _authorize_write_existing(self, ctx: RequestContext, id: str) -> None:
        """Fetch the stored endpoint (checked read), then check write on its org/id."""
        stored = await self.find_notification_endpoint_by_id(ctx, id)
        self._authz.authorize_write(ctx, _RESOURCE_TYPE, stored.org_id, stored.id)
