"""Unit tests for InventoryRepository with a mocked gate."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from catalog.domain.value_objects import InventoryStatus
from catalog.infrastructure.inventory_repository import InventoryRepository
from catalog.infrastructure.models import (
    InventoryLogModel,
    ProductModel,
    ProductVariantModel,
)


@pytest.fixture
def mock_gate():
    gate = AsyncMock()
    gate.update.return_value = MagicMock()
    return gate


@pytest.fixture
def repository(mock_gate, mock_probe) -> InventoryRepository:
    return InventoryRepository(mock_gate, probe=mock_probe)


class TestDecrement:
    @pytest.mark.asyncio
    async def test_rejects_non_positive_quantity(self, repository, mock_gate):
        with pytest.raises(ValueError):
            await repository.decrement("prod-1", 0)

        mock_gate.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_product_decrement_is_guarded(self, repository, mock_gate):
        mock_gate.update.return_value.first.return_value = (8, "IN_STOCK")

        decrement = await repository.decrement("prod-1", 2, order_id="order-1")

        assert decrement.previous_qty == 10
        assert decrement.new_qty == 8
        assert decrement.change_qty == -2
        args = mock_gate.update.call_args.args
        assert args[0] is ProductModel
        guard = str(args[2])
        assert "inventory_qty >=" in guard

    @pytest.mark.asyncio
    async def test_variant_decrement_targets_variant_stock(self, repository, mock_gate):
        mock_gate.update.return_value.first.return_value = (2, "LOW_STOCK")

        decrement = await repository.decrement("prod-1", 1, variant_id="var-1")

        assert mock_gate.update.call_args.args[0] is ProductVariantModel
        assert "stock_quantity" in mock_gate.update.call_args.kwargs["values"]
        assert decrement.status is InventoryStatus.LOW_STOCK

    @pytest.mark.asyncio
    async def test_writes_inventory_log(self, repository, mock_gate):
        mock_gate.update.return_value.first.return_value = (0, "OUT_OF_STOCK")

        await repository.decrement("prod-1", 3, order_id="order-1", user_id="user-1")

        log = mock_gate.insert.call_args.args[0]
        assert isinstance(log, InventoryLogModel)
        assert log.previous_qty == 3
        assert log.new_qty == 0
        assert log.change_qty == -3
        assert log.reason == "Sale"
        assert log.order_id == "order-1"
        assert log.user_id == "user-1"

    @pytest.mark.asyncio
    async def test_zero_rows_means_not_enough_stock(self, repository, mock_gate, mock_probe):
        mock_gate.update.return_value.first.return_value = None

        assert await repository.decrement("prod-1", 5) is None

        mock_gate.insert.assert_not_called()
        mock_probe.stock_decrement_rejected.assert_called_once_with(
            product_id="prod-1",
            variant_id=None,
            requested=5,
        )

    @pytest.mark.asyncio
    async def test_low_stock_is_reported(self, repository, mock_gate, mock_probe):
        mock_gate.update.return_value.first.return_value = (0, "OUT_OF_STOCK")

        await repository.decrement("prod-1", 1)

        mock_probe.low_stock_reached.assert_called_once_with(
            product_id="prod-1",
            variant_id=None,
            quantity=0,
            status="OUT_OF_STOCK",
        )

    @pytest.mark.asyncio
    async def test_in_stock_is_not_reported_as_low(self, repository, mock_gate, mock_probe):
        mock_gate.update.return_value.first.return_value = (20, "IN_STOCK")

        await repository.decrement("prod-1", 1)

        mock_probe.low_stock_reached.assert_not_called()
