"""Unit tests for audit log HTTP routes."""

from unittest.mock import AsyncMock

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from ulid import ULID

from audit.domain.entry import AuditEntry
from audit.domain.listing import AuditLogPage

TENANT_ID = str(ULID())


@pytest.fixture
def mock_repository():
    return AsyncMock()


@pytest.fixture
def test_client(mock_repository):
    """Create TestClient with mocked dependencies."""
    from fastapi import FastAPI

    from audit import dependencies
    from audit.presentation import routes
    from infrastructure.middleware import TenantContextMiddleware

    app = FastAPI()
    app.add_middleware(TenantContextMiddleware)
    app.dependency_overrides[dependencies.get_audit_log_repository] = lambda: mock_repository
    app.include_router(routes.router)

    client = TestClient(app)
    client.headers.update({"X-Tenant-ID": TENANT_ID})
    return client


class TestListAuditLogsRoute:
    def test_lists_entries_of_bound_tenant(self, test_client, mock_repository):
        entry = AuditEntry(
            entity_type="Order",
            entity_id="o-1",
            action="CREATE",
            tenant_id=TENANT_ID,
            changes={"order_number": "ORD-00001"},
        )
        mock_repository.list_entries.return_value = AuditLogPage(
            entries=[entry], total=1, page=1, limit=50
        )

        response = test_client.get("/audit-logs", params={"entity_type": "Order"})

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["total"] == 1
        assert body["total_pages"] == 1
        assert body["entries"][0]["id"] == entry.id
        assert body["entries"][0]["changes"] == {"order_number": "ORD-00001"}

        tenant_id, filters, page = mock_repository.list_entries.await_args.args
        assert tenant_id == TENANT_ID
        assert filters.entity_type == "Order"
        assert page.limit == 50

    def test_passes_paging(self, test_client, mock_repository):
        mock_repository.list_entries.return_value = AuditLogPage(
            entries=[], total=0, page=2, limit=10
        )

        response = test_client.get("/audit-logs", params={"page": 2, "limit": 10})

        assert response.status_code == status.HTTP_200_OK
        page = mock_repository.list_entries.await_args.args[2]
        assert page.offset == 10

    @pytest.mark.parametrize("params", [{"limit": 101}, {"limit": 0}, {"page": 0}])
    def test_rejects_out_of_range_paging(self, test_client, mock_repository, params):
        response = test_client.get("/audit-logs", params=params)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        mock_repository.list_entries.assert_not_called()

    def test_repository_failure_is_500(self, test_client, mock_repository):
        mock_repository.list_entries.side_effect = RuntimeError("db down")

        response = test_client.get("/audit-logs")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["detail"] == "Failed to list audit logs"
