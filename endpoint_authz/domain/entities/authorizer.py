"""Authorizer entities: permission sets bound to a caller.

An upstream authentication layer resolves the caller to one of these and
attaches it to the RequestContext. This package only reads them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from endpoint_authz.domain.enums import AuthorizationStatus
from endpoint_authz.domain.value_objects.permission import Permission, permission_allowed
from endpoint_authz.shared.utils.datetime import as_utc, utc_now


@dataclass(frozen=True)
class Authorization:
    """API token authorizer.

    Grants its permissions only while status is ACTIVE; an inactive token
    allows nothing.
    """

    id: str
    org_id: str
    user_id: str
    permissions: tuple[Permission, ...] = ()
    status: AuthorizationStatus = AuthorizationStatus.ACTIVE
    description: str = ""

    def allowed(self, permission: Permission, at: datetime | None = None) -> bool:
        if not self.is_active():
            return False
        return permission_allowed(permission, self.permissions)

    def is_active(self) -> bool:
        return self.status == AuthorizationStatus.ACTIVE

    def identifier(self) -> str:
        return self.id

    def get_user_id(self) -> str:
        return self.user_id

    def kind(self) -> str:
        return "authorization"


@dataclass(frozen=True)
class Session:
    """User session authorizer.

    Grants its permissions until expires_at; an expired session allows
    nothing. Expiry is judged at the request's received_at, so every check
    within one request gets the same answer. Permissions are resolved at
    login and fixed for the session.
    """

    id: str
    user_id: str
    expires_at: datetime
    permissions: tuple[Permission, ...] = ()
    created_at: datetime = field(default_factory=utc_now)

    def allowed(self, permission: Permission, at: datetime | None = None) -> bool:
        """Check permission as of at (the request time), or now when omitted."""
        if self.expired(at):
            return False
        return permission_allowed(permission, self.permissions)

    def expired(self, now: datetime | None = None) -> bool:
        """Return True when the session is past expires_at (UTC)."""
        return as_utc(now or utc_now()) >= as_utc(self.expires_at)

    def identifier(self) -> str:
        return self.id

    def get_user_id(self) -> str:
        return self.user_id

    def kind(self) -> str:
        return "session"
