"""Wiring of the repositories used inside one order transaction."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from catalog.infrastructure.catalog_repository import CatalogRepository
from catalog.infrastructure.inventory_repository import InventoryRepository
from infrastructure.database.tenant_gate import TenantScopedGate
from infrastructure.settings import CheckoutSettings
from ordering.infrastructure.address_repository import AddressRepository
from ordering.infrastructure.order_number_sequence import OrderNumberSequence
from ordering.infrastructure.order_repository import OrderRepository
from ordering.ports.repositories import CheckoutRepositories


class CheckoutRepositoriesFactory:
    """Builds gate-backed repositories sharing one session."""

    def __init__(self, settings: CheckoutSettings) -> None:
        self._settings = settings

    def __call__(self, session: AsyncSession) -> CheckoutRepositories:
        gate = TenantScopedGate(session)
        return CheckoutRepositories(
            catalog=CatalogRepository(gate),
            inventory=InventoryRepository(gate),
            addresses=AddressRepository(gate),
            orders=OrderRepository(gate),
            order_numbers=OrderNumberSequence(
                gate,
                prefix=self._settings.order_number_prefix,
                width=self._settings.order_number_width,
            ),
        )
