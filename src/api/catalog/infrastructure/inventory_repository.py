"""Gate-backed implementation of IInventoryRepository.

Stock is decremented with a single conditional UPDATE:

    UPDATE products
       SET inventory_qty = inventory_qty - :n, inventory_status = CASE ...
     WHERE tenant_id = :tenant AND id = :id AND inventory_qty >= :n
    RETURNING inventory_qty, inventory_status

The guard and the write are evaluated atomically by the database, so two
transactions racing for the last unit cannot both succeed: the second one
matches zero rows once the first has committed (or blocks on the row lock
until it does).
"""

from __future__ import annotations

from sqlalchemy import case
from ulid import ULID

from catalog.domain.value_objects import (
    InventoryChangeReason,
    InventoryStatus,
    StockDecrement,
)
from catalog.infrastructure.models import (
    InventoryLogModel,
    ProductModel,
    ProductVariantModel,
)
from catalog.infrastructure.observability import DefaultInventoryProbe, InventoryProbe
from catalog.ports.repositories import IInventoryRepository
from infrastructure.database.tenant_gate import TenantScopedGate


def _status_after(new_qty, low_stock_threshold):
    """SQL CASE mirroring determine_inventory_status for the post-update quantity."""
    return case(
        (new_qty <= 0, InventoryStatus.OUT_OF_STOCK.value),
        (new_qty <= low_stock_threshold, InventoryStatus.LOW_STOCK.value),
        else_=InventoryStatus.IN_STOCK.value,
    )


class InventoryRepository(IInventoryRepository):
    """Applies guarded stock decrements and writes the inventory log."""

    def __init__(
        self,
        gate: TenantScopedGate,
        probe: InventoryProbe | None = None,
    ) -> None:
        self._gate = gate
        self._probe = probe or DefaultInventoryProbe()

    async def decrement(
        self,
        product_id: str,
        quantity: int,
        variant_id: str | None = None,
        order_id: str | None = None,
        user_id: str | None = None,
    ) -> StockDecrement | None:
        if quantity <= 0:
            raise ValueError(f"Decrement quantity must be positive, got {quantity}")

        if variant_id is None:
            stock = ProductModel.inventory_qty
            result = await self._gate.update(
                ProductModel,
                ProductModel.id == product_id,
                stock >= quantity,
                values={
                    "inventory_qty": stock - quantity,
                    "inventory_status": _status_after(
                        stock - quantity, ProductModel.low_stock_threshold
                    ),
                },
                returning=(ProductModel.inventory_qty, ProductModel.inventory_status),
            )
        else:
            stock = ProductVariantModel.stock_quantity
            result = await self._gate.update(
                ProductVariantModel,
                ProductVariantModel.id == variant_id,
                ProductVariantModel.product_id == product_id,
                stock >= quantity,
                values={
                    "stock_quantity": stock - quantity,
                    "inventory_status": _status_after(
                        stock - quantity, ProductVariantModel.low_stock_threshold
                    ),
                },
                returning=(
                    ProductVariantModel.stock_quantity,
                    ProductVariantModel.inventory_status,
                ),
            )

        row = result.first()
        if row is None:
            self._probe.stock_decrement_rejected(
                product_id=product_id,
                variant_id=variant_id,
                requested=quantity,
            )
            return None

        new_qty, status = int(row[0]), InventoryStatus(row[1])
        decrement = StockDecrement(
            product_id=product_id,
            variant_id=variant_id,
            previous_qty=new_qty + quantity,
            new_qty=new_qty,
            status=status,
        )

        await self._gate.insert(
            InventoryLogModel(
                id=str(ULID()),
                product_id=product_id,
                variant_id=variant_id,
                previous_qty=decrement.previous_qty,
                new_qty=decrement.new_qty,
                change_qty=decrement.change_qty,
                reason=InventoryChangeReason.SALE.value,
                order_id=order_id,
                user_id=user_id,
            )
        )

        self._probe.stock_decremented(
            product_id=product_id,
            variant_id=variant_id,
            previous_qty=decrement.previous_qty,
            new_qty=decrement.new_qty,
        )
        if status is not InventoryStatus.IN_STOCK:
            self._probe.low_stock_reached(
                product_id=product_id,
                variant_id=variant_id,
                quantity=new_qty,
                status=status.value,
            )

        return decrement
