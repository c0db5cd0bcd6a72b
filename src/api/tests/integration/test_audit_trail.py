"""Integration tests for the audit trail: recorder, dispatcher, sink and listing."""

from __future__ import annotations

from decimal import Decimal

import pytest

from audit.application.recorder import AuditTrailRecorder
from audit.domain.listing import AuditLogFilter, PageRequest
from audit.infrastructure.audit_log_repository import AuditLogRepository
from ordering.application.services import CreateOrderInput
from ordering.domain.value_objects import CartLine, RequestMetadata

pytestmark = [pytest.mark.integration]


@pytest.mark.asyncio
async def test_order_creation_is_audited(
    fulfillment_service, audit_dispatcher, seed, session_factory, tenant_id, portland
):
    product_id = await seed.product(tenant_id, price="10.00")

    order = await fulfillment_service.create_order(
        CreateOrderInput(
            tenant_id=tenant_id,
            lines=[CartLine(product_id=product_id, quantity=3)],
            shipping_address=portland,
            shipping_method="standard",
            shipping_cost=Decimal("5.99"),
            user_id="user-42",
            request_metadata=RequestMetadata(ip_address="203.0.113.9", user_agent="pytest"),
        )
    )
    await audit_dispatcher.drain()

    async with session_factory() as session:
        page = await AuditLogRepository(session).list_entries(
            tenant_id, AuditLogFilter(entity_type="Order"), PageRequest()
        )

    assert page.total == 1
    entry = page.entries[0]
    assert entry.entity_id == order.id.value
    assert entry.action == "CREATE"
    assert entry.actor_id == "user-42"
    assert entry.ip_address == "203.0.113.9"
    assert entry.user_agent == "pytest"
    assert entry.changes["order_number"] == order.order_number
    assert entry.changes["total_amount"] == "35.99"
    assert entry.changes["item_count"] == 3


@pytest.mark.asyncio
async def test_listing_is_filtered_by_tenant(
    audit_dispatcher, session_factory, tenant_id, other_tenant_id
):
    recorder = AuditTrailRecorder(audit_dispatcher)
    for index in range(3):
        recorder.record(
            entity_type="Product",
            entity_id=f"prod-{index}",
            method="PATCH",
            tenant_id=tenant_id,
            actor_id="editor",
        )
    recorder.record(
        entity_type="Product",
        entity_id="foreign",
        method="DELETE",
        tenant_id=other_tenant_id,
    )
    await audit_dispatcher.drain()

    async with session_factory() as session:
        repository = AuditLogRepository(session)
        mine = await repository.list_entries(tenant_id, AuditLogFilter(), PageRequest(limit=2))
        deletes = await repository.list_entries(
            tenant_id, AuditLogFilter(action="delete"), PageRequest()
        )
        theirs = await repository.list_entries(other_tenant_id, AuditLogFilter(), PageRequest())

    assert mine.total == 3
    assert len(mine.entries) == 2
    assert mine.total_pages == 2
    assert {e.action for e in mine.entries} == {"UPDATE"}
    assert deletes.total == 0
    assert [e.entity_id for e in theirs.entries] == ["foreign"]
