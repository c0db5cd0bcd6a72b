"""Domain events for the ordering context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class OrderPlaced:
    """Event raised when an order has been created.

    Attributes:
        order_id: The ULID of the created order
        tenant_id: The tenant owning the order
        order_number: Tenant-scoped human-readable number
        total_amount: Grand total charged for the order
        item_count: Number of line items
        actor_id: User who placed the order, if known
        occurred_at: When the event occurred (UTC)
    """

    order_id: str
    tenant_id: str
    order_number: str
    total_amount: Decimal
    item_count: int
    occurred_at: datetime
    actor_id: str | None = None


DomainEvent = OrderPlaced
