"""Tests for span output of the authorizing service and the traced decorator."""

from unittest.mock import AsyncMock

import pytest
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode

from endpoint_authz.application.dtos.notification_endpoint import NotificationEndpointFilter
from endpoint_authz.application.services.notification_endpoint_service import (
    AuthorizingNotificationEndpointService,
)
from endpoint_authz.domain.exceptions import UnauthorizedException
from endpoint_authz.shared.telemetry.tracing import traced

ORG_A = "020f755c3c082000"
ORG_B = "020f755c3c082001"
USER_ID = "020f755c3c083000"
ID_1 = "0000000000000001"
ID_2 = "0000000000000002"

READ_A = f"read:orgs/{ORG_A}/notificationEndpoints"
WRITE_A = f"write:orgs/{ORG_A}/notificationEndpoints"


@pytest.fixture
def svc(inner: AsyncMock) -> AuthorizingNotificationEndpointService:
    return AuthorizingNotificationEndpointService(inner)


def _by_name(exporter: InMemorySpanExporter) -> dict:
    return {span.name: span for span in exporter.get_finished_spans()}


def _event_names(span) -> list[str]:
    return [event.name for event in span.events]


class TestDeniedRead:
    @pytest.mark.asyncio
    async def test_span_records_decision_once(
        self, svc, inner, make_endpoint, ctx_with, span_exporter
    ) -> None:
        inner.find_notification_endpoint_by_id.return_value = make_endpoint(
            id=ID_1, org_id=ORG_B
        )
        with pytest.raises(UnauthorizedException):
            await svc.find_notification_endpoint_by_id(ctx_with(READ_A), ID_1)

        span = _by_name(span_exporter)["notification_endpoint.find_by_id"]
        assert span.attributes["authz.allowed"] is False
        assert span.attributes["authz.action"] == "read"
        assert span.attributes["authz.resource_type"] == "notificationEndpoints"
        assert span.attributes["arg.id"] == ID_1
        assert span.attributes["request.id"] == "req-test"
        assert _event_names(span) == ["authorization.denied", "exception"]
        assert span.status.status_code is StatusCode.ERROR


class TestDeniedDelete:
    @pytest.mark.asyncio
    async def test_write_denial_lands_on_delete_span(
        self, svc, inner, make_endpoint, ctx_with, span_exporter
    ) -> None:
        inner.find_notification_endpoint_by_id.return_value = make_endpoint(
            id=ID_1, org_id=ORG_A
        )
        with pytest.raises(UnauthorizedException):
            await svc.delete_notification_endpoint(ctx_with(READ_A), ID_1)

        spans = _by_name(span_exporter)
        lookup = spans["notification_endpoint.find_by_id"]
        delete = spans["notification_endpoint.delete"]

        assert lookup.parent.span_id == delete.context.span_id
        assert lookup.attributes["authz.allowed"] is True
        assert lookup.status.status_code is StatusCode.OK
        assert _event_names(lookup) == []

        assert delete.attributes["arg.id"] == ID_1
        assert delete.attributes["authz.allowed"] is False
        assert delete.attributes["authz.action"] == "write"
        assert _event_names(delete).count("authorization.denied") == 1
        assert _event_names(delete).count("exception") == 1


class TestSuccessfulCalls:
    @pytest.mark.asyncio
    async def test_create_records_user_but_not_payload(
        self, svc, make_endpoint, ctx_with, span_exporter
    ) -> None:
        endpoint = make_endpoint(token="xoxb-secret")
        await svc.create_notification_endpoint(ctx_with(WRITE_A), endpoint, USER_ID)

        span = _by_name(span_exporter)["notification_endpoint.create"]
        assert span.status.status_code is StatusCode.OK
        assert span.attributes["arg.user_id"] == USER_ID
        assert "xoxb-secret" not in str(dict(span.attributes))
        assert _event_names(span) == []

    @pytest.mark.asyncio
    async def test_list_counts_filtered_items(
        self, svc, inner, make_endpoint, ctx_with, span_exporter
    ) -> None:
        inner.find_notification_endpoints.return_value = (
            [make_endpoint(id=ID_1, org_id=ORG_A), make_endpoint(id=ID_2, org_id=ORG_B)],
            2,
        )
        listed, count = await svc.find_notification_endpoints(
            ctx_with(READ_A), NotificationEndpointFilter(user_id=USER_ID)
        )
        assert count == 1

        span = _by_name(span_exporter)["notification_endpoint.find_many"]
        assert span.attributes["authz.filtered"] == 1
        assert span.status.status_code is StatusCode.OK


class TestTracedDecorator:
    def test_rejects_sync_functions(self) -> None:
        with pytest.raises(TypeError, match="async"):

            @traced("sync.op")
            def op() -> None:
                return None

    @pytest.mark.asyncio
    async def test_failure_recorded_once(self, span_exporter) -> None:
        @traced("failing.op")
        async def op(id: str) -> None:
            raise ValueError("boom")

        with pytest.raises(ValueError):
            await op(ID_1)

        (span,) = span_exporter.get_finished_spans()
        assert span.name == "failing.op"
        assert span.attributes["arg.id"] == ID_1
        assert _event_names(span) == ["exception"]
        assert span.status.description == "boom"
