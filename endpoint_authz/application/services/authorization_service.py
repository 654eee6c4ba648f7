"""Authorization service: evaluates required permissions against the request's authorizer."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from endpoint_authz.core.context import RequestContext, get_authorizer
from endpoint_authz.domain.enums import Action, ResourceType
from endpoint_authz.domain.exceptions import UnauthorizedException
from endpoint_authz.domain.value_objects.permission import Permission
from endpoint_authz.shared.telemetry.tracing import add_span_attributes, add_span_event

logger = logging.getLogger(__name__)


class AuthorizationService:
    """Centralized permission checking against the authorizer bound to ctx.

    Stateless: one instance is shared by all requests. Checks never mutate
    the authorizer, so repeating a check gives the same answer.
    """

    def is_allowed(self, ctx: RequestContext, permission: Permission) -> None:
        """Raise UnauthorizedException unless ctx's authorizer covers permission.

        A missing authorizer is a denial, never a pass. The check is made as
        of ctx.received_at, so repeating it within a request cannot flip.
        """
        authorizer = get_authorizer(ctx)
        allowed = authorizer.allowed(permission, ctx.received_at)
        add_span_attributes(
            **{
                "authz.action": permission.action.value,
                "authz.resource_type": permission.resource.type.value,
                "authz.allowed": allowed,
            }
        )
        if allowed:
            logger.debug(
                "%s %s allowed %s",
                authorizer.kind(),
                authorizer.identifier(),
                permission,
            )
            return
        logger.info(
            "%s %s (user %s) denied %s (request_id=%s)",
            authorizer.kind(),
            authorizer.identifier(),
            authorizer.get_user_id(),
            permission,
            ctx.request_id,
        )
        add_span_event(
            "authorization.denied",
            action=permission.action.value,
            resource_type=permission.resource.type.value,
            authorizer_kind=authorizer.kind(),
        )
        raise UnauthorizedException(
            f"{permission} is unauthorized",
            action=permission.action.value,
            resource_type=permission.resource.type.value,
            resource_id=permission.resource.id,
        )

    def is_allowed_all(
        self, ctx: RequestContext, permissions: Iterable[Permission]
    ) -> None:
        """Raise on the first permission in permissions that is not allowed."""
        for permission in permissions:
            self.is_allowed(ctx, permission)

    def authorize_read(
        self,
        ctx: RequestContext,
        resource_type: ResourceType,
        org_id: str,
        id: str,
    ) -> None:
        """Require read on one resource instance within its org."""
        self.is_allowed(ctx, Permission.at_id(Action.READ, resource_type, org_id, id))

    def authorize_write(
        self,
        ctx: RequestContext,
        resource_type: ResourceType,
        org_id: str,
        id: str,
    ) -> None:
        """Require write on one resource instance within its org."""
        self.is_allowed(ctx, Permission.at_id(Action.WRITE, resource_type, org_id, id))

    def authorize_write_org(
        self,
        ctx: RequestContext,
        resource_type: ResourceType,
        org_id: str,
    ) -> None:
        """Require write on a resource type across one org (no instance yet)."""
        self.is_allowed(ctx, Permission.new(Action.WRITE, resource_type, org_id))
