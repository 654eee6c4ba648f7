"""Pytest configuration and fixtures for endpoint-authz.

Provides platform IDs, endpoint factories, request contexts bound to
token authorizers, and an AsyncMock spy standing in for the inner
notification endpoint service.
"""

import logging
from collections.abc import Callable, Iterator
from unittest.mock import AsyncMock

import pytest
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from endpoint_authz.core.config import Settings
from endpoint_authz.core.context import RequestContext
from endpoint_authz.domain.entities.authorizer import Authorization
from endpoint_authz.domain.entities.notification_endpoint import (
    SlackNotificationEndpoint,
)
from endpoint_authz.domain.value_objects.permission import Permission
from endpoint_authz.shared.telemetry.logging import PACKAGE_LOGGER

ORG_A = "020f755c3c082000"
ORG_B = "020f755c3c082001"
USER_ID = "020f755c3c083000"
TOKEN_ID = "020f755c3c084000"

_SPAN_EXPORTER = InMemorySpanExporter()


@pytest.fixture(scope="session", autouse=True)
def tracer_provider() -> Iterator[TracerProvider]:
    """Install an SDK provider once, before anything else can set the global one."""
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(_SPAN_EXPORTER))
    trace.set_tracer_provider(provider)
    yield provider
    provider.shutdown()


@pytest.fixture
def span_exporter() -> InMemorySpanExporter:
    """Finished spans recorded during the current test only."""
    _SPAN_EXPORTER.clear()
    return _SPAN_EXPORTER


@pytest.fixture
def package_logger() -> Iterator[logging.Logger]:
    """Package logger, with handlers and level restored after the test."""
    package = logging.getLogger(PACKAGE_LOGGER)
    handlers, level = list(package.handlers), package.level
    yield package
    package.handlers[:] = handlers
    package.setLevel(level)


@pytest.fixture
def org_a() -> str:
    return ORG_A


@pytest.fixture
def org_b() -> str:
    return ORG_B


@pytest.fixture
def user_id() -> str:
    return USER_ID


@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def make_endpoint() -> Callable[..., SlackNotificationEndpoint]:
    """Factory for Slack endpoints; id defaults to None (unsaved)."""

    def _make(
        id: str | None = None,
        org_id: str = ORG_A,
        name: str = "ops-alerts",
        **kwargs,
    ) -> SlackNotificationEndpoint:
        kwargs.setdefault("url", "https://hooks.slack.com/services/x")
        return SlackNotificationEndpoint(id=id, org_id=org_id, name=name, **kwargs)

    return _make


@pytest.fixture
def ctx_with() -> Callable[..., RequestContext]:
    """Factory: RequestContext bound to an active token holding the given grants.

    Grants are canonical permission strings, e.g.
    'read:orgs/020f755c3c082000/notificationEndpoints'.
    """

    def _ctx(*grants: str, org_id: str = ORG_A) -> RequestContext:
        authorization = Authorization(
            id=TOKEN_ID,
            org_id=org_id,
            user_id=USER_ID,
            permissions=tuple(Permission.parse(g) for g in grants),
        )
        return RequestContext(request_id="req-test").with_authorizer(authorization)

    return _ctx


@pytest.fixture
def inner() -> AsyncMock:
    """Spy inner service; configure return values per test."""
    return AsyncMock()
