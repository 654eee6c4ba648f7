"""In-memory notification endpoint service (implements INotificationEndpointService).

Authoritative store with no authorization of its own; wrap it in
AuthorizingNotificationEndpointService before exposing it to callers.
Stored endpoints are copied in and out so callers never share state with
the store.
"""

from __future__ import annotations

import asyncio
import copy
import logging

from endpoint_authz.application.dtos.notification_endpoint import (
    FindOptions,
    NotificationEndpointFilter,
    NotificationEndpointUpdate,
)
from endpoint_authz.core.context import RequestContext
from endpoint_authz.domain.entities.notification_endpoint import NotificationEndpoint
from endpoint_authz.domain.enums import ResourceType
from endpoint_authz.domain.exceptions import ConflictException, ResourceNotFoundException
from endpoint_authz.domain.value_objects.core import SecretField
from endpoint_authz.shared.utils.datetime import utc_now
from endpoint_authz.shared.utils.generators import generate_platform_id

logger = logging.getLogger(__name__)

_RESOURCE_TYPE = ResourceType.NOTIFICATION_ENDPOINTS.value


class InMemoryNotificationEndpointService:
    """Notification endpoints kept in a dict, plus the owner mapping made on create."""

    def __init__(self, default_limit: int = 20, max_limit: int = 100) -> None:
        self.default_limit = default_limit
        self.max_limit = max_limit
        self._endpoints: dict[str, NotificationEndpoint] = {}
        self._owners: dict[str, set[str]] = {}
        self._lock = asyncio.Lock()

    async def find_notification_endpoint_by_id(
        self, ctx: RequestContext, id: str
    ) -> NotificationEndpoint:
        async with self._lock:
            return copy.deepcopy(self._get(id))

    async def find_notification_endpoints(
        self,
        ctx: RequestContext,
        filter: NotificationEndpointFilter,
        *opts: FindOptions,
    ) -> tuple[list[NotificationEndpoint], int]:
        """Return one page of matching endpoints and the total number matching.

        Only the first FindOptions is used. Limit defaults to default_limit and
        is capped at max_limit.
        """
        opt = opts[0] if opts else FindOptions()
        async with self._lock:
            matching = [e for e in self._endpoints.values() if self._matches(e, filter)]
            matching.sort(
                key=lambda e: (getattr(e, opt.sort_by), e.id),
                reverse=opt.descending,
            )
            limit = min(opt.limit or self.default_limit, self.max_limit)
            page = matching[opt.offset : opt.offset + limit]
            return [copy.deepcopy(e) for e in page], len(matching)

    async def create_notification_endpoint(
        self,
        ctx: RequestContext,
        endpoint: NotificationEndpoint,
        user_id: str,
    ) -> None:
        """Store a new endpoint and record user_id as its owner.

        Sets id (when absent), created_at and updated_at on the given endpoint.

        Raises:
            ValidationException: If the endpoint is invalid.
            ConflictException: If the id exists or the name is taken in the org.
        """
        endpoint.validate()
        async with self._lock:
            if endpoint.id is not None and endpoint.id in self._endpoints:
                raise ConflictException(
                    "notification endpoint already exists", {"id": endpoint.id}
                )
            self._check_name_available(endpoint.org_id, endpoint.name)
            if endpoint.id is None:
                endpoint.id = generate_platform_id()
            now = utc_now()
            endpoint.created_at = now
            endpoint.updated_at = now
            self._endpoints[endpoint.id] = copy.deepcopy(endpoint)
            self._owners.setdefault(endpoint.id, set()).add(user_id)
        logger.info(
            "Created notification endpoint %s in org %s", endpoint.id, endpoint.org_id
        )

    async def update_notification_endpoint(
        self,
        ctx: RequestContext,
        id: str,
        endpoint: NotificationEndpoint,
        user_id: str,
    ) -> NotificationEndpoint:
        """Replace the stored endpoint's configuration.

        id, org_id and created_at are kept from the stored endpoint; an
        endpoint cannot move between organizations.
        """
        async with self._lock:
            current = self._get(id)
            replacement = copy.deepcopy(endpoint)
            replacement.id = current.id
            replacement.org_id = current.org_id
            replacement.created_at = current.created_at
            replacement.updated_at = utc_now()
            replacement.validate()
            if replacement.name != current.name:
                self._check_name_available(replacement.org_id, replacement.name)
            self._endpoints[id] = replacement
            return copy.deepcopy(replacement)

    async def patch_notification_endpoint(
        self,
        ctx: RequestContext,
        id: str,
        update: NotificationEndpointUpdate,
    ) -> NotificationEndpoint:
        update.valid()
        async with self._lock:
            current = self._get(id)
            if update.name is not None and update.name != current.name:
                self._check_name_available(current.org_id, update.name)
            update.apply(current)
            return copy.deepcopy(current)

    async def delete_notification_endpoint(
        self, ctx: RequestContext, id: str
    ) -> tuple[list[SecretField], str]:
        async with self._lock:
            endpoint = self._get(id)
            del self._endpoints[id]
            self._owners.pop(id, None)
        logger.info("Deleted notification endpoint %s in org %s", id, endpoint.org_id)
        return endpoint.secret_fields(), id

    def _get(self, id: str) -> NotificationEndpoint:
        endpoint = self._endpoints.get(id)
        if endpoint is None:
            raise ResourceNotFoundException(_RESOURCE_TYPE, id)
        return endpoint

    def _matches(
        self, endpoint: NotificationEndpoint, filter: NotificationEndpointFilter
    ) -> bool:
        if filter.id is not None and endpoint.id != filter.id:
            return False
        if filter.org_id is not None and endpoint.org_id != filter.org_id:
            return False
        if filter.user_id is not None and filter.user_id not in self._owners.get(
            endpoint.id, set()
        ):
            return False
        return True

    def _check_name_available(self, org_id: str, name: str) -> None:
        for existing in self._endpoints.values():
            if existing.org_id == org_id and existing.name == name:
                raise ConflictException(
                    f"notification endpoint with name {name!r} already exists",
                    {"org_id": org_id, "name": name},
                )
