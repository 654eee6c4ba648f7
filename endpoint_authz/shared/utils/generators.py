"""ID generators."""

import secrets

from endpoint_authz.domain.value_objects.core import PlatformID


def generate_platform_id() -> str:
    """Generate a random non-zero platform ID (16 lowercase hex chars).

    Returns:
        A new ID string.
    """
    while True:
        value = secrets.randbits(64)
        if value:
            return PlatformID.from_int(value).value
