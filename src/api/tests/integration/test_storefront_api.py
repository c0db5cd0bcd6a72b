"""End-to-end tests for the checkout and audit HTTP API.

The application runs with its real lifespan (schema creation, audit
dispatcher) against the same SQLite file the fixtures seed.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from decimal import Decimal

import pytest
import pytest_asyncio
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient

from infrastructure.settings import (
    get_audit_settings,
    get_checkout_settings,
    get_database_settings,
    get_settings,
)

pytestmark = [pytest.mark.integration]

ADDRESS = {
    "name": "Ada Shopper",
    "line1": "1 Main St",
    "city": "Los Angeles",
    "region": "CA",
    "postal_code": "90001",
    "country": "us",
}


def _clear_settings_caches() -> None:
    for getter in (get_settings, get_database_settings, get_checkout_settings, get_audit_settings):
        getter.cache_clear()


@pytest_asyncio.fixture
async def app(integration_db_settings, engine, monkeypatch) -> AsyncGenerator:
    monkeypatch.setenv("STOREFRONT_DB_SQLITE_PATH", integration_db_settings.sqlite_path)
    monkeypatch.setenv("AUTO_CREATE_SCHEMA", "true")
    _clear_settings_caches()

    from main import app

    async with LifespanManager(app):
        yield app

    _clear_settings_caches()


@pytest_asyncio.fixture
async def client(app, tenant_id) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"X-Tenant-ID": tenant_id, "X-Actor-ID": "shopper-1"},
    ) as client:
        yield client


@pytest.mark.asyncio
async def test_validate_price_and_place_order(app, client, seed, tenant_id):
    product_id = await seed.product(tenant_id, price="29.99", inventory_qty=2)
    lines = [{"product_id": product_id, "quantity": 2, "unit_price": "1.00"}]

    validated = await client.post("/checkout/validate", json={"lines": lines})
    assert validated.status_code == 200
    assert validated.json()["is_valid"] is True
    assert Decimal(validated.json()["subtotal"]) == Decimal("59.98")

    options = await client.post(
        "/checkout/shipping-options",
        json={"lines": lines, "shipping_address": ADDRESS},
    )
    assert options.status_code == 200
    assert [option["id"] for option in options.json()] == ["free", "standard", "express"]

    placed = await client.post(
        "/orders",
        json={
            "lines": lines,
            "shipping_address": ADDRESS,
            "shipping_method": "free",
            "shipping_cost": "0.00",
        },
    )
    assert placed.status_code == 201
    body = placed.json()
    assert body["order_number"] == "ORD-00001"
    assert Decimal(body["tax_amount"]) == Decimal("4.35")
    assert Decimal(body["total_amount"]) == Decimal("64.33")

    await app.state.audit_dispatcher.drain()
    audit = await client.get("/audit-logs", params={"entity_type": "Order"})
    assert audit.status_code == 200
    entries = audit.json()["entries"]
    assert len(entries) == 1
    assert entries[0]["entity_id"] == body["id"]
    assert entries[0]["actor_id"] == "shopper-1"


@pytest.mark.asyncio
async def test_sold_out_cart_returns_conflict(client, seed, tenant_id):
    product_id = await seed.product(tenant_id, inventory_qty=1)
    order = {
        "lines": [{"product_id": product_id, "quantity": 2}],
        "shipping_address": ADDRESS,
        "shipping_method": "standard",
        "shipping_cost": "5.99",
    }

    response = await client.post("/orders", json=order)

    assert response.status_code == 409
    errors = response.json()["detail"]["errors"]
    assert [error["code"] for error in errors] == ["INSUFFICIENT_STOCK"]


@pytest.mark.asyncio
async def test_foreign_product_is_unprocessable(client, seed, other_tenant_id):
    product_id = await seed.product(other_tenant_id)
    order = {
        "lines": [{"product_id": product_id, "quantity": 1}],
        "shipping_address": ADDRESS,
        "shipping_method": "standard",
        "shipping_cost": "5.99",
    }

    response = await client.post("/orders", json=order)

    assert response.status_code == 422
    assert response.json()["detail"]["errors"][0]["code"] == "PRODUCT_UNAVAILABLE"


@pytest.mark.asyncio
async def test_missing_tenant_header_is_rejected(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/audit-logs")

    assert response.status_code == 400
