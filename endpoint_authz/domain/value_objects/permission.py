"""Permission value objects: what an operation requires and what a caller holds.

A Permission is (action, resource) where the resource is a type optionally
scoped to an organization and/or a single instance. The same type describes
both a requirement (built per call) and a grant (held by an authorizer);
Permission.matches decides whether a grant covers a requirement.

Canonical string form:
    read:notificationEndpoints
    read:notificationEndpoints/<id>
    write:orgs/<org id>/notificationEndpoints
    write:orgs/<org id>/notificationEndpoints/<id>
"""

from __future__ import annotations

from dataclasses import dataclass

from endpoint_authz.domain.enums import Action, ResourceType
from endpoint_authz.domain.exceptions import InvalidPermissionException
from endpoint_authz.domain.value_objects.core import PlatformID


def _validate_id(value: str | None, field: str) -> None:
    """Raise InvalidPermissionException if a present id is not a valid PlatformID."""
    if value is None:
        return
    try:
        PlatformID(value)
    except ValueError as e:
        raise InvalidPermissionException(f"invalid {field}: {e}", field=field) from e


@dataclass(frozen=True)
class Resource:
    """Resource half of a permission: type plus optional org and instance scope."""

    type: ResourceType
    org_id: str | None = None
    id: str | None = None

    def __post_init__(self) -> None:
        """Coerce the type to ResourceType and validate identifiers.

        Raises:
            InvalidPermissionException: If the type is unknown or an id is malformed.
        """
        try:
            object.__setattr__(self, "type", ResourceType(self.type))
        except ValueError as e:
            raise InvalidPermissionException(
                f"unknown resource type: {self.type!r}", field="resource_type"
            ) from e
        _validate_id(self.org_id, "org_id")
        _validate_id(self.id, "id")

    def __str__(self) -> str:
        if self.org_id is not None and self.id is not None:
            return f"{ResourceType.ORGS.value}/{self.org_id}/{self.type.value}/{self.id}"
        if self.org_id is not None:
            return f"{ResourceType.ORGS.value}/{self.org_id}/{self.type.value}"
        if self.id is not None:
            return f"{self.type.value}/{self.id}"
        return self.type.value


@dataclass(frozen=True)
class Permission:
    """Immutable (action, resource) pair.

    Use the constructors rather than building Resource by hand:
        Permission.new(Action.WRITE, ResourceType.NOTIFICATION_ENDPOINTS, org_id)
        Permission.at_id(Action.READ, ResourceType.NOTIFICATION_ENDPOINTS, org_id, id)
    """

    action: Action
    resource: Resource

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "action", Action(self.action))
        except ValueError as e:
            raise InvalidPermissionException(
                f"unknown action: {self.action!r}", field="action"
            ) from e
        if not isinstance(self.resource, Resource):
            raise InvalidPermissionException(
                "resource must be a Resource", field="resource"
            )

    @classmethod
    def for_type(cls, action: Action | str, resource_type: ResourceType | str) -> Permission:
        """Permission on every resource of a type, across all organizations."""
        return cls(action, Resource(resource_type))

    @classmethod
    def new(
        cls,
        action: Action | str,
        resource_type: ResourceType | str,
        org_id: str,
    ) -> Permission:
        """Permission on every resource of a type within one organization.

        Raises:
            InvalidPermissionException: If org_id is missing or malformed.
        """
        if org_id is None:
            raise InvalidPermissionException("org_id is required", field="org_id")
        return cls(action, Resource(resource_type, org_id=org_id))

    @classmethod
    def at_id(
        cls,
        action: Action | str,
        resource_type: ResourceType | str,
        org_id: str,
        id: str,
    ) -> Permission:
        """Permission on one resource instance, bound to the org that owns it.

        Raises:
            InvalidPermissionException: If org_id or id is missing or malformed.
        """
        if org_id is None:
            raise InvalidPermissionException("org_id is required", field="org_id")
        if id is None:
            raise InvalidPermissionException("id is required", field="id")
        return cls(action, Resource(resource_type, org_id=org_id, id=id))

    @classmethod
    def parse(cls, text: str) -> Permission:
        """Parse the canonical string form (see module docstring).

        Raises:
            InvalidPermissionException: If the string is not a valid permission.
        """
        action, sep, path = (text or "").partition(":")
        if not sep or not path:
            raise InvalidPermissionException(
                f"permission must be '<action>:<resource>', got {text!r}"
            )
        parts = path.strip("/").split("/")
        if len(parts) == 1:
            return cls(action, Resource(parts[0]))
        if len(parts) == 2:
            return cls(action, Resource(parts[0], id=parts[1]))
        if parts[0] == ResourceType.ORGS.value and len(parts) == 3:
            return cls(action, Resource(parts[2], org_id=parts[1]))
        if parts[0] == ResourceType.ORGS.value and len(parts) == 4:
            return cls(action, Resource(parts[2], org_id=parts[1], id=parts[3]))
        raise InvalidPermissionException(f"unrecognized permission resource: {path!r}")

    def matches(self, required: Permission) -> bool:
        """Return True if this permission, held as a grant, covers the required one.

        Action and type must be equal. A grant with neither org nor id covers
        the whole type. A grant with an id covers that id only, and only in its
        own org when it names one. An org-wide grant covers anything in that org.
        """
        if self.action != required.action:
            return False
        granted, wanted = self.resource, required.resource
        if granted.type != wanted.type:
            return False
        if granted.org_id is None and granted.id is None:
            return True
        if granted.id is not None:
            if wanted.id != granted.id:
                return False
            return granted.org_id is None or granted.org_id == wanted.org_id
        return wanted.org_id is not None and granted.org_id == wanted.org_id

    def __str__(self) -> str:
        return f"{self.action.value}:{self.resource}"


def permission_allowed(required: Permission, granted: tuple[Permission, ...] | list[Permission]) -> bool:
    """Return True if any granted permission covers the required one."""
    return any(p.matches(required) for p in granted)
