"""Repository protocols (ports) for the catalog bounded context.

Implementations read and write through the tenant-scoped gate, so every
method operates on the tenant bound to the current scope.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from catalog.domain.value_objects import ProductSnapshot, StockDecrement, VariantSnapshot


@runtime_checkable
class ICatalogRepository(Protocol):
    """Read access to products and variants for checkout."""

    async def get_product(self, product_id: str) -> ProductSnapshot | None:
        """Retrieve a product regardless of its publication state.

        Args:
            product_id: The product to look up

        Returns:
            The product snapshot, or None if it does not exist in the tenant
        """
        ...

    async def get_variant(self, product_id: str, variant_id: str) -> VariantSnapshot | None:
        """Retrieve a variant belonging to the given product.

        Returns:
            The variant snapshot, or None if it does not exist under that product
        """
        ...


@runtime_checkable
class IInventoryRepository(Protocol):
    """Guarded stock mutation."""

    async def decrement(
        self,
        product_id: str,
        quantity: int,
        variant_id: str | None = None,
        order_id: str | None = None,
        user_id: str | None = None,
    ) -> StockDecrement | None:
        """Atomically remove ``quantity`` units from stock.

        The decrement only applies when enough stock remains; the check and
        the write are one statement. An inventory log row is written for
        every applied decrement.

        Returns:
            The applied decrement, or None when stock was insufficient (or the
            item no longer exists)
        """
        ...
