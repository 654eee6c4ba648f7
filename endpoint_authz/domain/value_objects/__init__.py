"""Domain value objects and shared value types."""

from endpoint_authz.domain.value_objects.core import (
    PlatformID,
    SecretField,
    is_valid_id,
)
from endpoint_authz.domain.value_objects.permission import (
    Permission,
    Resource,
    permission_allowed,
)

__all__ = [
    "PlatformID",
    "SecretField",
    "is_valid_id",
    "Permission",
    "Resource",
    "permission_allowed",
]
