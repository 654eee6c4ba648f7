"""End-to-end tests: authorizing service composed over the in-memory store."""

from datetime import timedelta

import pytest

from endpoint_authz.application.dtos.notification_endpoint import (
    NotificationEndpointFilter,
    NotificationEndpointUpdate,
)
from endpoint_authz.application.services.notification_endpoint_service import (
    AuthorizingNotificationEndpointService,
)
from endpoint_authz.core.composition import (
    build_notification_endpoint_service,
    init_observability,
    shutdown_observability,
)
from endpoint_authz.core.config import Settings
from endpoint_authz.core.context import RequestContext
from endpoint_authz.domain.entities.authorizer import Session
from endpoint_authz.domain.exceptions import ResourceNotFoundException, UnauthorizedException
from endpoint_authz.domain.value_objects.permission import Permission
from endpoint_authz.shared.telemetry.logging import HANDLER_NAME
from endpoint_authz.shared.telemetry.telemetry import get_telemetry
from endpoint_authz.shared.utils.datetime import utc_now

ORG_A = "020f755c3c082000"
ORG_B = "020f755c3c082001"
OWNER = "020f755c3c083000"
OUTSIDER = "020f755c3c083001"


def _session(user_id: str, *grants: str) -> RequestContext:
    session = Session(
        id=user_id,
        user_id=user_id,
        expires_at=utc_now() + timedelta(hours=1),
        permissions=tuple(Permission.parse(g) for g in grants),
    )
    return RequestContext(request_id=f"req-{user_id}").with_authorizer(session)


@pytest.fixture
def service(settings: Settings) -> AuthorizingNotificationEndpointService:
    return build_notification_endpoint_service(settings)


@pytest.fixture
def owner_ctx() -> RequestContext:
    return _session(
        OWNER,
        f"read:orgs/{ORG_A}/notificationEndpoints",
        f"write:orgs/{ORG_A}/notificationEndpoints",
    )


@pytest.fixture
def outsider_ctx() -> RequestContext:
    return _session(
        OUTSIDER,
        f"read:orgs/{ORG_B}/notificationEndpoints",
        f"write:orgs/{ORG_B}/notificationEndpoints",
    )


@pytest.mark.asyncio
async def test_owner_lifecycle(service, owner_ctx, make_endpoint) -> None:
    endpoint = make_endpoint(token="xoxb")
    await service.create_notification_endpoint(owner_ctx, endpoint, OWNER)

    found = await service.find_notification_endpoint_by_id(owner_ctx, endpoint.id)
    assert found.name == "ops-alerts"

    patched = await service.patch_notification_endpoint(
        owner_ctx, endpoint.id, NotificationEndpointUpdate(name="renamed")
    )
    assert patched.name == "renamed"

    secrets, deleted = await service.delete_notification_endpoint(owner_ctx, endpoint.id)
    assert deleted == endpoint.id
    assert [s.key for s in secrets] == [f"{endpoint.id}-token"]

    with pytest.raises(ResourceNotFoundException):
        await service.find_notification_endpoint_by_id(owner_ctx, endpoint.id)


@pytest.mark.asyncio
async def test_outsider_cannot_touch_other_org(
    service, owner_ctx, outsider_ctx, make_endpoint
) -> None:
    endpoint = make_endpoint()
    await service.create_notification_endpoint(owner_ctx, endpoint, OWNER)

    with pytest.raises(UnauthorizedException):
        await service.find_notification_endpoint_by_id(outsider_ctx, endpoint.id)
    with pytest.raises(UnauthorizedException):
        await service.update_notification_endpoint(
            outsider_ctx, endpoint.id, make_endpoint(org_id=ORG_B, name="hijack"), OUTSIDER
        )
    with pytest.raises(UnauthorizedException):
        await service.create_notification_endpoint(outsider_ctx, make_endpoint(), OUTSIDER)

    unchanged = await service.find_notification_endpoint_by_id(owner_ctx, endpoint.id)
    assert unchanged.name == "ops-alerts"
    assert unchanged.org_id == ORG_A


@pytest.mark.asyncio
async def test_user_scoped_list_is_filtered(
    service, owner_ctx, outsider_ctx, make_endpoint
) -> None:
    await service.create_notification_endpoint(owner_ctx, make_endpoint(name="a"), OWNER)
    await service.create_notification_endpoint(outsider_ctx, make_endpoint(org_id=ORG_B, name="b"), OWNER)

    both = _session(
        OWNER,
        f"read:orgs/{ORG_A}/notificationEndpoints",
        f"read:orgs/{ORG_B}/notificationEndpoints",
    )
    listed, count = await service.find_notification_endpoints(
        both, NotificationEndpointFilter(user_id=OWNER)
    )
    assert [e.name for e in listed] == ["a", "b"]
    assert count == 2

    listed, count = await service.find_notification_endpoints(
        owner_ctx, NotificationEndpointFilter(user_id=OWNER)
    )
    assert [e.name for e in listed] == ["a"]
    assert count == 1


@pytest.mark.asyncio
async def test_expired_session_fails_closed(service, make_endpoint) -> None:
    expired = Session(
        id=OWNER,
        user_id=OWNER,
        expires_at=utc_now() - timedelta(minutes=1),
        permissions=(Permission.parse("write:notificationEndpoints"),),
    )
    ctx = RequestContext().with_authorizer(expired)
    with pytest.raises(UnauthorizedException):
        await service.create_notification_endpoint(ctx, make_endpoint(), OWNER)


@pytest.mark.usefixtures("package_logger")
def test_observability_disabled_registers_nothing(settings: Settings) -> None:
    assert init_observability(settings) is None
    assert get_telemetry() is None


def test_observability_enabled_registers_and_shuts_down(package_logger) -> None:
    settings = Settings(_env_file=None, telemetry_enabled=True, telemetry_exporter="none")
    telemetry = init_observability(settings)
    try:
        assert telemetry is not None
        assert get_telemetry() is telemetry
        assert telemetry.tracer_provider is not None
        assert "otelTraceID" in _package_format(package_logger)
    finally:
        shutdown_observability()
    assert get_telemetry() is None
    assert telemetry.tracer_provider is None
    assert "otelTraceID" not in _package_format(package_logger)


def _package_format(package_logger) -> str:
    (handler,) = [h for h in package_logger.handlers if h.get_name() == HANDLER_NAME]
    return handler.formatter._fmt
