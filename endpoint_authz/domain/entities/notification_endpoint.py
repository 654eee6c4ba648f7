"""Notification endpoint domain entities.

An endpoint is a destination for alert notifications, owned by one
organization. Three kinds exist (Slack, PagerDuty, HTTP); each knows which
of its fields are secrets so deletes can report what was removed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar
from urllib.parse import urlparse

from endpoint_authz.domain.enums import EndpointStatus, EndpointType, HTTPAuthMethod
from endpoint_authz.domain.exceptions import ValidationException
from endpoint_authz.domain.value_objects.core import SecretField, is_valid_id

_HTTP_METHODS = frozenset({"POST", "PUT", "GET"})


def _validate_url(value: str | None, field_name: str, required: bool = True) -> None:
    """Raise ValidationException unless value is an http(s) URL with a host."""
    if not value:
        if required:
            raise ValidationException(f"{field_name} is required", field=field_name)
        return
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationException(
            f"{field_name} must be an http(s) URL", field=field_name
        )


@dataclass
class NotificationEndpoint:
    """Base notification endpoint (SRP: identity, ownership, lifecycle).

    Subclasses add kind-specific configuration and secrets. The
    authorization layer reads only org_id, id, and secret_fields().
    """

    org_id: str
    name: str
    id: str | None = None
    description: str = ""
    status: EndpointStatus = EndpointStatus.ACTIVE
    created_at: datetime | None = None
    updated_at: datetime | None = None

    endpoint_type: ClassVar[EndpointType]

    def validate(self) -> None:
        """Validate shared endpoint rules. Raises ValidationException if invalid."""
        if self.id is not None and not is_valid_id(self.id):
            raise ValidationException("Notification endpoint ID is invalid", field="id")
        if not is_valid_id(self.org_id):
            raise ValidationException(
                "Notification endpoint org_id is invalid", field="org_id"
            )
        if not self.name or not self.name.strip():
            raise ValidationException("Notification endpoint name is required", field="name")
        if self.status not in EndpointStatus.values():
            raise ValidationException(
                f"Invalid status: {self.status}", field="status"
            )

    def secret_fields(self) -> list[SecretField]:
        """Return the secret keys held by this endpoint (none for the base type)."""
        return []


@dataclass
class SlackNotificationEndpoint(NotificationEndpoint):
    """Slack incoming-webhook endpoint; token is optional."""

    url: str = ""
    token: str | None = None

    endpoint_type: ClassVar[EndpointType] = EndpointType.SLACK

    def validate(self) -> None:
        super().validate()
        _validate_url(self.url, "url")

    def secret_fields(self) -> list[SecretField]:
        if self.id is None or not self.token:
            return []
        return [SecretField.for_resource(self.id, "token")]


@dataclass
class PagerDutyNotificationEndpoint(NotificationEndpoint):
    """PagerDuty Events API endpoint keyed by an integration routing key."""

    client_url: str = ""
    routing_key: str = ""

    endpoint_type: ClassVar[EndpointType] = EndpointType.PAGERDUTY

    def validate(self) -> None:
        super().validate()
        _validate_url(self.client_url, "client_url", required=False)
        if not self.routing_key:
            raise ValidationException(
                "PagerDuty endpoint routing_key is required", field="routing_key"
            )

    def secret_fields(self) -> list[SecretField]:
        if self.id is None:
            return []
        return [SecretField.for_resource(self.id, "routing-key")]


@dataclass
class HTTPNotificationEndpoint(NotificationEndpoint):
    """Generic HTTP endpoint with optional basic or bearer authentication."""

    url: str = ""
    method: str = "POST"
    auth_method: HTTPAuthMethod = HTTPAuthMethod.NONE
    username: str | None = None
    password: str | None = None
    token: str | None = None
    headers: dict[str, str] = field(default_factory=dict)

    endpoint_type: ClassVar[EndpointType] = EndpointType.HTTP

    def validate(self) -> None:
        """Validate URL, method, and credentials for the configured auth method.

        Raises:
            ValidationException: If URL or method is invalid, or credentials
                required by auth_method are missing.
        """
        super().validate()
        _validate_url(self.url, "url")
        if self.method.upper() not in _HTTP_METHODS:
            raise ValidationException(
                f"Invalid HTTP method: {self.method}", field="method"
            )
        if self.auth_method == HTTPAuthMethod.BASIC:
            if not self.username or not self.password:
                raise ValidationException(
                    "Basic auth requires username and password", field="auth_method"
                )
        elif self.auth_method == HTTPAuthMethod.BEARER:
            if not self.token:
                raise ValidationException(
                    "Bearer auth requires token", field="auth_method"
                )
        elif self.auth_method != HTTPAuthMethod.NONE:
            raise ValidationException(
                f"Invalid auth method: {self.auth_method}", field="auth_method"
            )

    def secret_fields(self) -> list[SecretField]:
        if self.id is None:
            return []
        if self.auth_method == HTTPAuthMethod.BASIC:
            return [
                SecretField.for_resource(self.id, "username"),
                SecretField.for_resource(self.id, "password"),
            ]
        if self.auth_method == HTTPAuthMethod.BEARER:
            return [SecretField.for_resource(self.id, "token")]
        return []
