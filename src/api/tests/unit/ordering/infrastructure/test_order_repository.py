"""Unit tests for OrderRepository and OrderNumberSequence with a mocked gate."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError

from ordering.domain.aggregates import Order
from ordering.domain.value_objects import ValidatedCartLine
from ordering.infrastructure.models import (
    OrderLineItemModel,
    OrderModel,
    OrderNumberCounterModel,
)
from ordering.infrastructure.order_number_sequence import OrderNumberSequence
from ordering.infrastructure.order_repository import OrderRepository
from ordering.ports.exceptions import OrderNumberConflict


@pytest.fixture
def mock_gate():
    return AsyncMock()


@pytest.fixture
def order() -> Order:
    return Order.place(
        tenant_id="tenant-1",
        order_number="ORD-00001",
        lines=[
            ValidatedCartLine(
                product_id="prod-1",
                product_name="Widget",
                sku="WID-001",
                unit_price=Decimal("29.99"),
                quantity=2,
                available_stock=10,
                track_inventory=True,
            )
        ],
        subtotal=Decimal("59.98"),
        tax_amount=Decimal("0"),
        shipping_amount=Decimal("5.99"),
        discount_amount=Decimal("0"),
        shipping_address_id="addr-1",
        billing_address_id="addr-1",
        shipping_method="standard",
    )


class TestOrderRepositoryAdd:
    @pytest.mark.asyncio
    async def test_writes_order_then_line_items(self, mock_gate, mock_probe, order):
        repository = OrderRepository(mock_gate, probe=mock_probe)

        await repository.add(order)

        order_model = mock_gate.insert.call_args.args[0]
        assert isinstance(order_model, OrderModel)
        assert order_model.order_number == "ORD-00001"
        assert order_model.total_amount == Decimal("65.97")

        items = mock_gate.insert_all.call_args.args[0]
        assert len(items) == 1
        assert isinstance(items[0], OrderLineItemModel)
        assert items[0].order_id == order.id.value
        mock_probe.order_saved.assert_called_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "message",
        [
            'duplicate key value violates unique constraint "uq_orders_tenant_order_number"',
            "UNIQUE constraint failed: orders.tenant_id, orders.order_number",
        ],
    )
    async def test_duplicate_order_number_is_a_conflict(
        self, mock_gate, mock_probe, order, message
    ):
        mock_gate.insert.side_effect = IntegrityError("INSERT", {}, Exception(message))
        repository = OrderRepository(mock_gate, probe=mock_probe)

        with pytest.raises(OrderNumberConflict) as exc_info:
            await repository.add(order)

        assert exc_info.value.order_number == "ORD-00001"
        mock_gate.insert_all.assert_not_called()
        mock_probe.duplicate_order_number.assert_called_once_with("ORD-00001")

    @pytest.mark.asyncio
    async def test_other_integrity_errors_propagate(self, mock_gate, order):
        mock_gate.insert.side_effect = IntegrityError(
            "INSERT", {}, Exception("FOREIGN KEY constraint failed")
        )
        repository = OrderRepository(mock_gate)

        with pytest.raises(IntegrityError):
            await repository.add(order)


class TestOrderNumberSequence:
    def test_format_pads_value(self, mock_gate):
        sequence = OrderNumberSequence(mock_gate)

        assert sequence.format(42) == "ORD-00042"

    def test_format_keeps_wide_values(self, mock_gate):
        sequence = OrderNumberSequence(mock_gate, prefix="A-", width=2)

        assert sequence.format(1234) == "A-1234"

    @pytest.mark.parametrize(
        "order_number, expected",
        [("ORD-00042", 42), ("ORD-", None), ("INV-00042", None), ("ORD-12a", None)],
    )
    def test_parse(self, mock_gate, order_number, expected):
        assert OrderNumberSequence(mock_gate).parse(order_number) == expected

    @pytest.mark.asyncio
    async def test_next_order_number_uses_tenant_counter(self, mock_gate):
        mock_gate.next_sequence_value.return_value = 3
        sequence = OrderNumberSequence(mock_gate)

        assert await sequence.next_order_number(minimum=2) == "ORD-00003"
        mock_gate.next_sequence_value.assert_awaited_once_with(
            OrderNumberCounterModel,
            value_column="last_value",
            minimum=2,
        )
