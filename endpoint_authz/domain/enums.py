"""Domain enumerations for endpoint-authz.

Enums represent fixed sets of domain values (actions, resource types,
endpoint and authorization status).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class Action(_ValuesMixin, str, Enum):
    """Action a permission grants on a resource."""

    READ = "read"
    WRITE = "write"


class ResourceType(_ValuesMixin, str, Enum):
    """Class of resource a permission applies to.

    Values are the path segments used in the canonical permission string
    (e.g. read:orgs/<org>/notificationEndpoints/<id>).
    """

    AUTHORIZATIONS = "authorizations"
    BUCKETS = "buckets"
    CHECKS = "checks"
    NOTIFICATION_ENDPOINTS = "notificationEndpoints"
    NOTIFICATION_RULES = "notificationRules"
    ORGS = "orgs"
    SECRETS = "secrets"
    USERS = "users"


class EndpointStatus(_ValuesMixin, str, Enum):
    """Notification endpoint status."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class EndpointType(_ValuesMixin, str, Enum):
    """Kind of notification endpoint."""

    SLACK = "slack"
    PAGERDUTY = "pagerduty"
    HTTP = "http"


class HTTPAuthMethod(_ValuesMixin, str, Enum):
    """Authentication scheme used by an HTTP notification endpoint."""

    NONE = "none"
    BASIC = "basic"
    BEARER = "bearer"


class AuthorizationStatus(_ValuesMixin, str, Enum):
    """API token (authorization) status."""

    ACTIVE = "active"
    INACTIVE = "inactive"
