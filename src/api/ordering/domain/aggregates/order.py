"""Order aggregate for the ordering context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal

from ulid import ULID

from ordering.domain.events import DomainEvent, OrderPlaced
from ordering.domain.value_objects import (
    ZERO,
    OrderId,
    OrderStatus,
    PaymentStatus,
    ValidatedCartLine,
    round_money,
)


@dataclass(frozen=True)
class OrderLineItem:
    """Denormalized copy of a validated cart line.

    Name, sku and price are copied at the moment of purchase and never
    change afterwards, even if the catalog does.
    """

    id: str
    product_id: str
    product_name: str
    sku: str
    unit_price: Decimal
    quantity: int
    line_subtotal: Decimal
    variant_id: str | None = None
    variant_name: str | None = None
    image: str | None = None

    @classmethod
    def from_validated_line(cls, line: ValidatedCartLine) -> OrderLineItem:
        """Copy a validated cart line into an immutable line item."""
        return cls(
            id=str(ULID()),
            product_id=line.product_id,
            product_name=line.product_name,
            sku=line.sku,
            unit_price=line.unit_price,
            quantity=line.quantity,
            line_subtotal=line.line_subtotal,
            variant_id=line.variant_id,
            variant_name=line.variant_name,
            image=line.image,
        )


@dataclass
class Order:
    """Order aggregate.

    Business rules:
    - total_amount == subtotal + tax_amount + shipping_amount - discount_amount
    - every amount is non-negative and rounded to cents
    - an order has at least one line item

    Event collection:
    - place() records OrderPlaced
    - Events can be collected via collect_events() once the order is committed
    """

    id: OrderId
    tenant_id: str
    order_number: str
    line_items: list[OrderLineItem]
    subtotal: Decimal
    tax_amount: Decimal
    shipping_amount: Decimal
    discount_amount: Decimal
    total_amount: Decimal
    shipping_address_id: str
    billing_address_id: str
    shipping_method: str
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    customer_id: str | None = None
    user_id: str | None = None
    discount_code: str | None = None
    customer_note: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    _pending_events: list[DomainEvent] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        amounts = {
            "subtotal": self.subtotal,
            "tax_amount": self.tax_amount,
            "shipping_amount": self.shipping_amount,
            "discount_amount": self.discount_amount,
            "total_amount": self.total_amount,
        }
        for name, amount in amounts.items():
            if amount < ZERO:
                raise ValueError(f"{name} cannot be negative, got {amount}")

        expected = self.subtotal + self.tax_amount + self.shipping_amount - self.discount_amount
        if self.total_amount != expected:
            raise ValueError(
                f"total_amount {self.total_amount} does not equal "
                f"subtotal + tax + shipping - discount ({expected})"
            )

        if not self.line_items:
            raise ValueError("An order needs at least one line item")

    @classmethod
    def place(
        cls,
        tenant_id: str,
        order_number: str,
        lines: list[ValidatedCartLine] | tuple[ValidatedCartLine, ...],
        subtotal: Decimal,
        tax_amount: Decimal,
        shipping_amount: Decimal,
        discount_amount: Decimal,
        shipping_address_id: str,
        billing_address_id: str,
        shipping_method: str,
        customer_id: str | None = None,
        user_id: str | None = None,
        discount_code: str | None = None,
        customer_note: str | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> Order:
        """Factory method for a new pending order.

        Amounts are rounded to cents and the total is derived from them, so
        the total invariant holds by construction.
        """
        subtotal = round_money(subtotal)
        tax_amount = round_money(tax_amount)
        shipping_amount = round_money(shipping_amount)
        discount_amount = round_money(discount_amount)

        order = cls(
            id=OrderId.generate(),
            tenant_id=tenant_id,
            order_number=order_number,
            line_items=[OrderLineItem.from_validated_line(line) for line in lines],
            subtotal=subtotal,
            tax_amount=tax_amount,
            shipping_amount=shipping_amount,
            discount_amount=discount_amount,
            total_amount=subtotal + tax_amount + shipping_amount - discount_amount,
            shipping_address_id=shipping_address_id,
            billing_address_id=billing_address_id,
            shipping_method=shipping_method,
            customer_id=customer_id,
            user_id=user_id,
            discount_code=discount_code,
            customer_note=customer_note,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        order._pending_events.append(
            OrderPlaced(
                order_id=order.id.value,
                tenant_id=tenant_id,
                order_number=order_number,
                total_amount=order.total_amount,
                item_count=len(order.line_items),
                occurred_at=order.created_at,
                actor_id=user_id,
            )
        )
        return order

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.line_items)

    def collect_events(self) -> list[DomainEvent]:
        """Return and clear pending domain events."""
        events = self._pending_events.copy()
        self._pending_events.clear()
        return events
