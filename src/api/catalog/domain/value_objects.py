"""Value objects for the catalog domain.

Snapshots are read-only projections of catalog rows taken inside the
caller's transaction. They carry just what checkout needs: price, stock
and the publication state.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum


class InventoryStatus(StrEnum):
    """Stock level classification stored next to every inventory quantity."""

    IN_STOCK = "IN_STOCK"
    LOW_STOCK = "LOW_STOCK"
    OUT_OF_STOCK = "OUT_OF_STOCK"


class InventoryChangeReason(StrEnum):
    """Reason recorded in the inventory log for a quantity change."""

    SALE = "Sale"
    CANCELLATION = "Cancellation"
    REFUND = "Refund"


def determine_inventory_status(quantity: int, low_stock_threshold: int) -> InventoryStatus:
    """Classify a stock quantity against its low-stock threshold."""
    if quantity <= 0:
        return InventoryStatus.OUT_OF_STOCK
    if quantity <= low_stock_threshold:
        return InventoryStatus.LOW_STOCK
    return InventoryStatus.IN_STOCK


@dataclass(frozen=True)
class ProductSnapshot:
    """Catalog product as seen by checkout."""

    id: str
    name: str
    sku: str
    price: Decimal
    inventory_qty: int
    track_inventory: bool
    is_published: bool
    is_deleted: bool
    image: str | None = None

    @property
    def is_purchasable(self) -> bool:
        """Published and not soft-deleted."""
        return self.is_published and not self.is_deleted


@dataclass(frozen=True)
class VariantSnapshot:
    """Product variant as seen by checkout.

    ``price`` and ``track_inventory`` fall back to the parent product when
    they are None.
    """

    id: str
    product_id: str
    name: str
    sku: str
    stock_quantity: int
    is_deleted: bool
    price: Decimal | None = None
    track_inventory: bool | None = None
    image: str | None = None


@dataclass(frozen=True)
class PurchasableItem:
    """The price and stock source resolved for one cart line.

    Variant-level values win over product-level values whenever a variant
    was requested.
    """

    product_id: str
    product_name: str
    sku: str
    unit_price: Decimal
    available_stock: int
    track_inventory: bool
    variant_id: str | None = None
    variant_name: str | None = None
    image: str | None = None

    @classmethod
    def resolve(
        cls,
        product: ProductSnapshot,
        variant: VariantSnapshot | None = None,
    ) -> PurchasableItem:
        """Resolve the effective price and stock for a product or variant."""
        if variant is None:
            return cls(
                product_id=product.id,
                product_name=product.name,
                sku=product.sku,
                unit_price=product.price,
                available_stock=product.inventory_qty,
                track_inventory=product.track_inventory,
                image=product.image,
            )

        return cls(
            product_id=product.id,
            product_name=product.name,
            sku=variant.sku or product.sku,
            unit_price=variant.price if variant.price is not None else product.price,
            available_stock=variant.stock_quantity,
            track_inventory=(
                variant.track_inventory
                if variant.track_inventory is not None
                else product.track_inventory
            ),
            variant_id=variant.id,
            variant_name=variant.name,
            image=variant.image or product.image,
        )


@dataclass(frozen=True)
class StockDecrement:
    """Outcome of one successful guarded stock decrement."""

    product_id: str
    variant_id: str | None
    previous_qty: int
    new_qty: int
    status: InventoryStatus

    @property
    def change_qty(self) -> int:
        return self.new_qty - self.previous_qty
