"""Unit tests for catalog value objects."""

from dataclasses import replace

import pytest

from catalog.domain.value_objects import (
    InventoryStatus,
    PurchasableItem,
    StockDecrement,
    determine_inventory_status,
)


class TestDetermineInventoryStatus:
    @pytest.mark.parametrize(
        "quantity, threshold, expected",
        [
            (0, 5, InventoryStatus.OUT_OF_STOCK),
            (5, 5, InventoryStatus.LOW_STOCK),
            (1, 5, InventoryStatus.LOW_STOCK),
            (6, 5, InventoryStatus.IN_STOCK),
            (1, 0, InventoryStatus.IN_STOCK),
        ],
    )
    def test_classifies_quantity(self, quantity, threshold, expected):
        assert determine_inventory_status(quantity, threshold) is expected


class TestPurchasableItem:
    def test_product_only(self, widget):
        item = PurchasableItem.resolve(widget)

        assert item.unit_price == widget.price
        assert item.available_stock == widget.inventory_qty
        assert item.variant_id is None

    def test_variant_overrides_product(self, widget, widget_large):
        item = PurchasableItem.resolve(widget, widget_large)

        assert item.unit_price == widget_large.price
        assert item.available_stock == widget_large.stock_quantity
        assert item.sku == widget_large.sku
        assert item.variant_name == "Large"

    def test_variant_inherits_missing_values(self, widget, widget_large):
        variant = replace(widget_large, price=None, track_inventory=None)

        item = PurchasableItem.resolve(replace(widget, track_inventory=False), variant)

        assert item.unit_price == widget.price
        assert item.track_inventory is False

    def test_unpublished_product_is_not_purchasable(self, widget):
        assert widget.is_purchasable
        assert not replace(widget, is_published=False).is_purchasable
        assert not replace(widget, is_deleted=True).is_purchasable


def test_stock_decrement_change_is_negative():
    decrement = StockDecrement(
        product_id="p",
        variant_id=None,
        previous_qty=3,
        new_qty=1,
        status=InventoryStatus.LOW_STOCK,
    )

    assert decrement.change_qty == -2
