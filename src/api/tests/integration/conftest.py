"""Integration test fixtures for database tests.

These fixtures run against a throwaway SQLite file per test, using the same
engine factory as the application (BEGIN IMMEDIATE transactions, foreign
keys enforced), so concurrency tests exercise real lock contention.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from ulid import ULID

import catalog.infrastructure.models  # noqa: F401
import ordering.infrastructure.models  # noqa: F401
from audit.application.recorder import AuditTrailRecorder
from audit.infrastructure.dispatcher import QueuedAuditDispatcher
from audit.infrastructure.models import AuditLogModel  # noqa: F401
from audit.infrastructure.sink import SqlAlchemyAuditSink
from catalog.infrastructure.models import ProductModel, ProductVariantModel
from infrastructure.database.engines import create_write_engine
from infrastructure.database.models import Base
from infrastructure.database.tenant_gate import TenantScopedGate
from infrastructure.settings import CheckoutSettings, DatabaseSettings
from ordering.application.services import OrderFulfillmentService
from ordering.domain.value_objects import PostalAddress
from ordering.infrastructure.checkout_repositories import CheckoutRepositoriesFactory
from ordering.infrastructure.pricing import NoDiscounts, RegionalTaxRates
from shared_kernel.tenancy import tenant_scope


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires database)",
    )


@pytest.fixture
def integration_db_settings(tmp_path) -> DatabaseSettings:
    """Database settings pointing at a fresh SQLite file."""
    return DatabaseSettings(sqlite_path=str(tmp_path / "storefront.db"))


@pytest_asyncio.fixture
async def engine(
    integration_db_settings: DatabaseSettings,
) -> AsyncGenerator[AsyncEngine, None]:
    """Engine with the full schema created."""
    engine = create_write_engine(integration_db_settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def tenant_id() -> str:
    return str(ULID())


@pytest.fixture
def other_tenant_id() -> str:
    return str(ULID())


@pytest.fixture
def checkout_settings() -> CheckoutSettings:
    return CheckoutSettings(transaction_timeout_seconds=30)


@pytest.fixture
def portland() -> PostalAddress:
    """A shipping address in a region without sales tax."""
    return PostalAddress(
        name="Ada Shopper",
        line1="1 Main St",
        city="Portland",
        region="OR",
        postal_code="97201",
        country="US",
    )


@pytest_asyncio.fixture
async def audit_dispatcher(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[QueuedAuditDispatcher, None]:
    dispatcher = QueuedAuditDispatcher(sink=SqlAlchemyAuditSink(session_factory))
    await dispatcher.start()
    yield dispatcher
    await dispatcher.stop()


@pytest.fixture
def fulfillment_service(
    session_factory: async_sessionmaker[AsyncSession],
    checkout_settings: CheckoutSettings,
    audit_dispatcher: QueuedAuditDispatcher,
) -> OrderFulfillmentService:
    return OrderFulfillmentService(
        session_factory=session_factory,
        repositories_factory=CheckoutRepositoriesFactory(checkout_settings),
        tax_rates=RegionalTaxRates(checkout_settings.tax_rates),
        discounts=NoDiscounts(),
        audit=AuditTrailRecorder(audit_dispatcher),
        settings=checkout_settings,
    )


class CatalogSeeder:
    """Inserts catalog rows for a tenant through the tenant-scoped gate."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def product(
        self,
        tenant_id: str,
        *,
        name: str = "Widget",
        price: str = "29.99",
        inventory_qty: int = 10,
        track_inventory: bool = True,
        is_published: bool = True,
    ) -> str:
        product_id = str(ULID())
        with tenant_scope(tenant_id):
            async with self._session_factory() as session, session.begin():
                await TenantScopedGate(session).insert(
                    ProductModel(
                        id=product_id,
                        name=name,
                        sku=f"SKU-{product_id[-6:]}",
                        price=Decimal(price),
                        inventory_qty=inventory_qty,
                        track_inventory=track_inventory,
                        is_published=is_published,
                    )
                )
        return product_id

    async def variant(
        self,
        tenant_id: str,
        product_id: str,
        *,
        name: str = "Large",
        price: str | None = None,
        stock_quantity: int = 5,
    ) -> str:
        variant_id = str(ULID())
        with tenant_scope(tenant_id):
            async with self._session_factory() as session, session.begin():
                await TenantScopedGate(session).insert(
                    ProductVariantModel(
                        id=variant_id,
                        product_id=product_id,
                        name=name,
                        sku=f"VAR-{variant_id[-6:]}",
                        price=Decimal(price) if price is not None else None,
                        stock_quantity=stock_quantity,
                    )
                )
        return variant_id


@pytest.fixture
def seed(session_factory: async_sessionmaker[AsyncSession]) -> CatalogSeeder:
    return CatalogSeeder(session_factory)
