"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure. Used by application and
infrastructure layers.
"""

from endpoint_authz.domain.entities import (
    Authorization,
    HTTPNotificationEndpoint,
    NotificationEndpoint,
    PagerDutyNotificationEndpoint,
    Session,
    SlackNotificationEndpoint,
)
from endpoint_authz.domain.enums import (
    Action,
    AuthorizationStatus,
    EndpointStatus,
    EndpointType,
    HTTPAuthMethod,
    ResourceType,
)
from endpoint_authz.domain.exceptions import (
    ConflictException,
    EndpointAuthzException,
    InvalidPermissionException,
    ResourceNotFoundException,
    UnauthorizedException,
    ValidationException,
)
from endpoint_authz.domain.value_objects import (
    Permission,
    PlatformID,
    Resource,
    SecretField,
)

__all__ = [
    # Entities
    "Authorization",
    "Session",
    "NotificationEndpoint",
    "SlackNotificationEndpoint",
    "PagerDutyNotificationEndpoint",
    "HTTPNotificationEndpoint",
    # Enums
    "Action",
    "AuthorizationStatus",
    "EndpointStatus",
    "EndpointType",
    "HTTPAuthMethod",
    "ResourceType",
    # Exceptions
    "ConflictException",
    "EndpointAuthzException",
    "InvalidPermissionException",
    "ResourceNotFoundException",
    "UnauthorizedException",
    "ValidationException",
    # Value objects
    "Permission",
    "PlatformID",
    "Resource",
    "SecretField",
]
