"""Domain value objects for endpoint-authz.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import re
from dataclasses import dataclass

# Platform IDs: 64-bit unsigned integers encoded as 16 lowercase hex chars.
PLATFORM_ID_LENGTH = 16
_PLATFORM_ID_RE = re.compile(r"^[0-9a-f]{16}$")
_ZERO_ID = "0" * PLATFORM_ID_LENGTH


@dataclass(frozen=True)
class PlatformID:
    """Value object for a platform resource identifier.

    Must be exactly 16 lowercase hexadecimal characters and must not
    encode zero (e.g. '020f755c3c082000').
    """

    value: str

    def __post_init__(self) -> None:
        """Validate length, hex characters, and non-zero value.

        Raises:
            ValueError: If empty, wrong length, non-hex, or zero.
        """
        if not isinstance(self.value, str) or not self.value:
            raise ValueError("ID must be a non-empty string")
        if len(self.value) != PLATFORM_ID_LENGTH:
            raise ValueError(
                f"ID must be {PLATFORM_ID_LENGTH} characters, got {len(self.value)}"
            )
        if not _PLATFORM_ID_RE.match(self.value):
            raise ValueError("ID must contain only lowercase hexadecimal characters")
        if self.value == _ZERO_ID:
            raise ValueError("ID must not be zero")

    @classmethod
    def from_int(cls, value: int) -> "PlatformID":
        """Encode a 64-bit integer as a PlatformID.

        Raises:
            ValueError: If value is zero, negative, or wider than 64 bits.
        """
        if value <= 0 or value >= 1 << 64:
            raise ValueError("ID must be a non-zero 64-bit unsigned integer")
        return cls(format(value, "016x"))

    def __str__(self) -> str:
        return self.value


def is_valid_id(value: str | None) -> bool:
    """Return True if value is a valid platform ID string."""
    if value is None:
        return False
    try:
        PlatformID(value)
    except ValueError:
        return False
    return True


@dataclass(frozen=True)
class SecretField:
    """Reference to a secret stored alongside a resource (key only, never the value).

    Keys follow '<resource id>-<suffix>' (e.g. '020f755c3c082000-token').
    """

    key: str

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("Secret field key must be a non-empty string")

    @classmethod
    def for_resource(cls, resource_id: str, suffix: str) -> "SecretField":
        """Build the secret key for a resource and secret suffix."""
        return cls(f"{resource_id}-{suffix}")

    def __str__(self) -> str:
        return self.key
