"""Gate-backed implementation of IOrderRepository.

Orders are written row by row through the tenant-scoped gate: the order
first (flushed immediately so a duplicate order number surfaces here), then
its line items.
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy.exc import IntegrityError

from infrastructure.database.tenant_gate import TenantScopedGate
from ordering.domain.aggregates import Order, OrderLineItem
from ordering.domain.value_objects import OrderId, OrderStatus, PaymentStatus
from ordering.infrastructure.models import OrderLineItemModel, OrderModel
from ordering.infrastructure.observability import (
    DefaultOrderRepositoryProbe,
    OrderRepositoryProbe,
)
from ordering.ports.exceptions import OrderNumberConflict
from ordering.ports.repositories import IOrderRepository

# PostgreSQL reports the constraint name, SQLite the column list.
_ORDER_NUMBER_VIOLATION_MARKERS = ("uq_orders_tenant_order_number", "orders.order_number")


def _is_order_number_violation(error: IntegrityError) -> bool:
    message = str(error.orig) if error.orig is not None else str(error)
    return any(marker in message for marker in _ORDER_NUMBER_VIOLATION_MARKERS)


class OrderRepository(IOrderRepository):
    """Repository managing storage for Order aggregates."""

    def __init__(
        self,
        gate: TenantScopedGate,
        probe: OrderRepositoryProbe | None = None,
    ) -> None:
        self._gate = gate
        self._probe = probe or DefaultOrderRepositoryProbe()

    async def add(self, order: Order) -> None:
        """Persist a new order and its line items.

        Raises:
            OrderNumberConflict: If the tenant already has an order with this number
        """
        try:
            await self._gate.insert(
                OrderModel(
                    id=order.id.value,
                    order_number=order.order_number,
                    customer_id=order.customer_id,
                    user_id=order.user_id,
                    status=order.status.value,
                    payment_status=order.payment_status.value,
                    shipping_address_id=order.shipping_address_id,
                    billing_address_id=order.billing_address_id,
                    subtotal=order.subtotal,
                    tax_amount=order.tax_amount,
                    shipping_amount=order.shipping_amount,
                    discount_amount=order.discount_amount,
                    total_amount=order.total_amount,
                    shipping_method=order.shipping_method,
                    discount_code=order.discount_code,
                    customer_note=order.customer_note,
                    ip_address=order.ip_address,
                    user_agent=order.user_agent,
                    created_at=order.created_at,
                    updated_at=order.created_at,
                )
            )
        except IntegrityError as e:
            if _is_order_number_violation(e):
                self._probe.duplicate_order_number(order.order_number)
                raise OrderNumberConflict(order.order_number) from e
            raise

        await self._gate.insert_all(
            [
                OrderLineItemModel(
                    id=item.id,
                    order_id=order.id.value,
                    product_id=item.product_id,
                    variant_id=item.variant_id,
                    product_name=item.product_name,
                    variant_name=item.variant_name,
                    sku=item.sku,
                    image=item.image,
                    unit_price=item.unit_price,
                    quantity=item.quantity,
                    line_subtotal=item.line_subtotal,
                )
                for item in order.line_items
            ]
        )

        self._probe.order_saved(
            order_id=order.id.value,
            order_number=order.order_number,
            line_item_count=len(order.line_items),
        )

    async def get_by_id(self, order_id: OrderId) -> Order | None:
        model = await self._gate.fetch_one(
            OrderModel,
            OrderModel.id == order_id.value,
            OrderModel.deleted_at.is_(None),
        )
        if model is None:
            self._probe.order_not_found(order_id.value)
            return None

        item_models = await self._gate.fetch_all(
            OrderLineItemModel,
            OrderLineItemModel.order_id == model.id,
            order_by=(OrderLineItemModel.id,),
        )

        order = Order(
            id=OrderId(value=model.id),
            tenant_id=model.tenant_id,
            order_number=model.order_number,
            line_items=[
                OrderLineItem(
                    id=item.id,
                    product_id=item.product_id,
                    product_name=item.product_name,
                    sku=item.sku,
                    unit_price=Decimal(item.unit_price),
                    quantity=item.quantity,
                    line_subtotal=Decimal(item.line_subtotal),
                    variant_id=item.variant_id,
                    variant_name=item.variant_name,
                    image=item.image,
                )
                for item in item_models
            ],
            subtotal=Decimal(model.subtotal),
            tax_amount=Decimal(model.tax_amount),
            shipping_amount=Decimal(model.shipping_amount),
            discount_amount=Decimal(model.discount_amount),
            total_amount=Decimal(model.total_amount),
            shipping_address_id=model.shipping_address_id,
            billing_address_id=model.billing_address_id,
            shipping_method=model.shipping_method,
            status=OrderStatus(model.status),
            payment_status=PaymentStatus(model.payment_status),
            customer_id=model.customer_id,
            user_id=model.user_id,
            discount_code=model.discount_code,
            customer_note=model.customer_note,
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            created_at=model.created_at,
        )

        self._probe.order_retrieved(order.id.value)
        return order
