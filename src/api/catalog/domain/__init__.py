"""Catalog domain: products, variants and their stock levels."""

from catalog.domain.value_objects import (
    InventoryChangeReason,
    InventoryStatus,
    ProductSnapshot,
    PurchasableItem,
    StockDecrement,
    VariantSnapshot,
    determine_inventory_status,
)

__all__ = [
    "InventoryChangeReason",
    "InventoryStatus",
    "ProductSnapshot",
    "PurchasableItem",
    "StockDecrement",
    "VariantSnapshot",
    "determine_inventory_status",
]
