"""Unit tests for the Order aggregate and ordering value objects."""

from decimal import Decimal

import pytest

from ordering.domain.aggregates import Order
from ordering.domain.events import OrderPlaced
from ordering.domain.value_objects import (
    CartErrorCode,
    CartLineError,
    OrderId,
    OrderStatus,
    PaymentStatus,
    ValidatedCart,
    ValidatedCartLine,
    round_money,
)


def _line(quantity: int = 2, unit_price: str = "29.99") -> ValidatedCartLine:
    return ValidatedCartLine(
        product_id="prod-1",
        product_name="Widget",
        sku="WID-001",
        unit_price=Decimal(unit_price),
        quantity=quantity,
        available_stock=10,
        track_inventory=True,
    )


def _place(**overrides) -> Order:
    values = dict(
        tenant_id="tenant-1",
        order_number="ORD-00001",
        lines=[_line()],
        subtotal=Decimal("59.98"),
        tax_amount=Decimal("0"),
        shipping_amount=Decimal("5.99"),
        discount_amount=Decimal("0"),
        shipping_address_id="addr-1",
        billing_address_id="addr-1",
        shipping_method="standard",
        user_id="user-1",
    )
    values.update(overrides)
    return Order.place(**values)


class TestRoundMoney:
    @pytest.mark.parametrize(
        "amount, expected",
        [
            (Decimal("4.34855"), Decimal("4.35")),
            (Decimal("0.005"), Decimal("0.01")),
            (Decimal("0.004"), Decimal("0.00")),
            (3, Decimal("3.00")),
        ],
    )
    def test_rounds_half_up_to_cents(self, amount, expected):
        assert round_money(amount) == expected


class TestOrderPlace:
    def test_total_is_derived_from_components(self):
        order = _place(tax_amount=Decimal("4.34855"), discount_amount=Decimal("1.00"))

        assert order.tax_amount == Decimal("4.35")
        assert order.total_amount == Decimal("69.32")
        assert (
            order.total_amount
            == order.subtotal + order.tax_amount + order.shipping_amount - order.discount_amount
        )

    def test_new_orders_are_pending(self):
        order = _place()

        assert order.status is OrderStatus.PENDING
        assert order.payment_status is PaymentStatus.PENDING

    def test_line_items_copy_the_validated_lines(self):
        order = _place(lines=[_line(quantity=3)])

        item = order.line_items[0]
        assert item.product_name == "Widget"
        assert item.unit_price == Decimal("29.99")
        assert item.line_subtotal == Decimal("89.97")
        assert order.item_count == 3

    def test_records_order_placed_event(self):
        order = _place()

        events = order.collect_events()

        assert len(events) == 1
        event = events[0]
        assert isinstance(event, OrderPlaced)
        assert event.order_id == order.id.value
        assert event.total_amount == Decimal("65.97")
        assert event.actor_id == "user-1"
        assert order.collect_events() == []

    def test_requires_a_line_item(self):
        with pytest.raises(ValueError, match="at least one line item"):
            _place(lines=[])

    def test_rejects_negative_amounts(self):
        with pytest.raises(ValueError, match="shipping_amount cannot be negative"):
            _place(shipping_amount=Decimal("-1"))


class TestOrderInvariant:
    def test_mismatched_total_is_rejected(self):
        order = _place()

        with pytest.raises(ValueError, match="does not equal"):
            Order(
                id=order.id,
                tenant_id=order.tenant_id,
                order_number=order.order_number,
                line_items=order.line_items,
                subtotal=order.subtotal,
                tax_amount=order.tax_amount,
                shipping_amount=order.shipping_amount,
                discount_amount=order.discount_amount,
                total_amount=order.total_amount + Decimal("0.01"),
                shipping_address_id=order.shipping_address_id,
                billing_address_id=order.billing_address_id,
                shipping_method=order.shipping_method,
            )


class TestOrderId:
    def test_generate_creates_valid_ulid(self):
        order_id = OrderId.generate()

        assert OrderId.from_string(order_id.value) == order_id

    def test_from_string_rejects_garbage(self):
        with pytest.raises(ValueError, match="Invalid OrderId"):
            OrderId.from_string("not-a-ulid")


class TestValidatedCart:
    def _error(self, code: CartErrorCode) -> CartLineError:
        return CartLineError(product_id="p", code=code, message="x")

    def test_stock_shortage_needs_only_stock_errors(self):
        shortage = ValidatedCart(
            lines=(),
            errors=(self._error(CartErrorCode.INSUFFICIENT_STOCK),),
            subtotal=Decimal("0.00"),
        )
        mixed = ValidatedCart(
            lines=(),
            errors=(
                self._error(CartErrorCode.INSUFFICIENT_STOCK),
                self._error(CartErrorCode.PRODUCT_UNAVAILABLE),
            ),
            subtotal=Decimal("0.00"),
        )

        assert shortage.is_stock_shortage
        assert not mixed.is_stock_shortage

    def test_total_quantity(self):
        cart = ValidatedCart(
            lines=(_line(quantity=2), _line(quantity=3)),
            errors=(),
            subtotal=Decimal("149.95"),
        )

        assert cart.total_quantity == 5
        assert cart.is_valid
