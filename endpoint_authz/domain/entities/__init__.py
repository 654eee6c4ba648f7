"""Domain entities: notification endpoints and authorizers."""

from endpoint_authz.domain.entities.authorizer import Authorization, Session
from endpoint_authz.domain.entities.notification_endpoint import (
    HTTPNotificationEndpoint,
    NotificationEndpoint,
    PagerDutyNotificationEndpoint,
    SlackNotificationEndpoint,
)

__all__ = [
    "Authorization",
    "Session",
    "NotificationEndpoint",
    "SlackNotificationEndpoint",
    "PagerDutyNotificationEndpoint",
    "HTTPNotificationEndpoint",
]
