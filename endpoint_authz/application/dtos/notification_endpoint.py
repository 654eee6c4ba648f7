"""DTOs for notification endpoint queries and partial updates."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from endpoint_authz.domain.entities.notification_endpoint import NotificationEndpoint
from endpoint_authz.domain.enums import EndpointStatus
from endpoint_authz.domain.exceptions import ValidationException
from endpoint_authz.domain.value_objects.core import is_valid_id
from endpoint_authz.shared.utils.datetime import utc_now


def _check_id(value: str | None) -> str | None:
    if value is not None and not is_valid_id(value):
        raise ValueError(f"invalid ID: {value!r}")
    return value


class NotificationEndpointFilter(BaseModel):
    """Query scope for collection reads.

    Authorized reads require org_id or user_id; id narrows to one endpoint.
    """

    model_config = ConfigDict(frozen=True)

    org_id: str | None = None
    user_id: str | None = None
    id: str | None = None

    @field_validator("org_id", "user_id", "id")
    @classmethod
    def _validate_ids(cls, v: str | None) -> str | None:
        return _check_id(v)

    def is_scoped(self) -> bool:
        """Return True if the filter names an organization or a user."""
        return self.org_id is not None or self.user_id is not None


class FindOptions(BaseModel):
    """Paging and sorting for collection reads."""

    model_config = ConfigDict(frozen=True)

    limit: int | None = Field(default=None, ge=1)
    offset: int = Field(default=0, ge=0)
    sort_by: Literal["name", "created_at", "updated_at"] = "name"
    descending: bool = False


class NotificationEndpointUpdate(BaseModel):
    """Partial update for an endpoint's shared fields (None = leave unchanged)."""

    name: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=2000)
    status: EndpointStatus | None = None

    def valid(self) -> None:
        """Raise ValidationException if a provided field is empty."""
        if self.name is not None and not self.name.strip():
            raise ValidationException(
                "Notification endpoint name can't be empty", field="name"
            )
        if self.description is not None and not self.description.strip():
            raise ValidationException(
                "Notification endpoint description can't be empty", field="description"
            )

    def apply(self, endpoint: NotificationEndpoint) -> NotificationEndpoint:
        """Apply provided fields to endpoint in place and bump updated_at."""
        if self.name is not None:
            endpoint.name = self.name
        if self.description is not None:
            endpoint.description = self.description
        if self.status is not None:
            endpoint.status = self.status
        endpoint.updated_at = utc_now()
        return endpoint
