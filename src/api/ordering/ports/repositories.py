"""Repository protocols (ports) for the ordering bounded context.

All implementations go through the tenant-scoped gate, so none of these
methods take a tenant id: they act on the tenant bound to the current scope.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from catalog.ports.repositories import ICatalogRepository, IInventoryRepository
from ordering.domain.aggregates import Order
from ordering.domain.value_objects import AddressType, OrderId, PostalAddress


@runtime_checkable
class IAddressRepository(Protocol):
    """Persists checkout addresses. A fresh row is created for every order."""

    async def add(self, address: PostalAddress, address_type: AddressType) -> str:
        """Persist an address and return its id."""
        ...


@runtime_checkable
class IOrderRepository(Protocol):
    """Repository for Order aggregate persistence."""

    async def add(self, order: Order) -> None:
        """Persist a new order and its line items.

        Raises:
            OrderNumberConflict: If the order number is already taken
        """
        ...

    async def get_by_id(self, order_id: OrderId) -> Order | None:
        """Retrieve an order with its line items, or None if not found."""
        ...


@runtime_checkable
class IOrderNumberSequence(Protocol):
    """Issues tenant-scoped order numbers."""

    async def next_order_number(self, minimum: int = 1) -> str:
        """Atomically allocate the next order number.

        Args:
            minimum: Lowest sequence value acceptable, used to skip past a
                number found to be taken
        """
        ...

    def parse(self, order_number: str) -> int | None:
        """Extract the sequence value from an order number, if it has one."""
        ...


@dataclass(frozen=True)
class CheckoutRepositories:
    """Repositories sharing one session for a single order transaction."""

    catalog: ICatalogRepository
    inventory: IInventoryRepository
    addresses: IAddressRepository
    orders: IOrderRepository
    order_numbers: IOrderNumberSequence
