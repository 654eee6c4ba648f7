"""Request context carrier.

The authentication layer builds one RequestContext per incoming request,
binds the caller's authorizer to it, and passes it as the first argument
(`ctx`) of every service call. Services read it; they never mutate it.

Usage:
    ctx = RequestContext(request_id="req-1").with_authorizer(session)
    authorizer = get_authorizer(ctx)
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import TYPE_CHECKING

from endpoint_authz.domain.exceptions import UnauthorizedException
from endpoint_authz.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from endpoint_authz.application.interfaces.services import IAuthorizer


@dataclass(frozen=True)
class RequestContext:
    """Immutable per-request state: the bound authorizer and request id.

    received_at is the instant permission checks are evaluated at, fixed
    when the context is built.
    """

    authorizer: IAuthorizer | None = None
    request_id: str | None = None
    received_at: datetime = field(default_factory=utc_now)

    def with_authorizer(self, authorizer: IAuthorizer | None) -> RequestContext:
        """Return a copy of this context with the given authorizer bound."""
        return replace(self, authorizer=authorizer)


def get_authorizer(ctx: RequestContext | None) -> IAuthorizer:
    """Return the authorizer bound to ctx.

    Raises:
        UnauthorizedException: If ctx is None or carries no authorizer.
    """
    authorizer = ctx.authorizer if ctx is not None else None
    if authorizer is None:
        raise UnauthorizedException("authorizer not found on context")
    return authorizer
