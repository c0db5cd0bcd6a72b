"""SQLAlchemy ORM models for the ordering bounded context.

Every table here is tenant-owned and must be accessed through the
tenant-scoped gate.
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import ForeignKey, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import (
    Base,
    CreatedAtMixin,
    SoftDeleteMixin,
    TenantOwnedMixin,
    TimestampMixin,
)


class AddressModel(Base, TenantOwnedMixin, CreatedAtMixin):
    """ORM model for addresses table.

    Checkout addresses are snapshots: a new row is written for every order
    and never updated.
    """

    __tablename__ = "addresses"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    line1: Mapped[str] = mapped_column(String(255), nullable=False)
    line2: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    region: Mapped[str | None] = mapped_column(String(100), nullable=True)
    postal_code: Mapped[str] = mapped_column(String(20), nullable=False)
    country: Mapped[str] = mapped_column(String(2), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<AddressModel(id={self.id}, type={self.type}, country={self.country})>"


class OrderModel(Base, TenantOwnedMixin, TimestampMixin, SoftDeleteMixin):
    """ORM model for orders table.

    Order numbers are unique per tenant. Orders are never hard-deleted;
    ``deleted_at`` is the only removal mechanism.
    """

    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    order_number: Mapped[str] = mapped_column(String(50), nullable=False)
    customer_id: Mapped[str | None] = mapped_column(String(26), nullable=True, index=True)
    user_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    payment_status: Mapped[str] = mapped_column(String(20), nullable=False)
    shipping_address_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("addresses.id", ondelete="RESTRICT"),
        nullable=False,
    )
    billing_address_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("addresses.id", ondelete="RESTRICT"),
        nullable=False,
    )
    subtotal: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    tax_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    shipping_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    discount_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    shipping_method: Mapped[str] = mapped_column(String(50), nullable=False)
    discount_code: Mapped[str | None] = mapped_column(String(50), nullable=True)
    customer_note: Mapped[str | None] = mapped_column(Text, nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(64), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(String(500), nullable=True)

    __table_args__ = (
        UniqueConstraint(
            "tenant_id",
            "order_number",
            name="uq_orders_tenant_order_number",
        ),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<OrderModel(id={self.id}, tenant_id={self.tenant_id}, "
            f"order_number={self.order_number}, total_amount={self.total_amount})>"
        )


class OrderLineItemModel(Base, TenantOwnedMixin, CreatedAtMixin):
    """ORM model for order_line_items table.

    Product name, sku and price are denormalized so the line item keeps
    describing what was bought after the catalog changes.
    """

    __tablename__ = "order_line_items"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    order_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    product_id: Mapped[str] = mapped_column(String(26), nullable=False, index=True)
    variant_id: Mapped[str | None] = mapped_column(String(26), nullable=True)
    product_name: Mapped[str] = mapped_column(String(255), nullable=False)
    variant_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    sku: Mapped[str] = mapped_column(String(100), nullable=False)
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    line_subtotal: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<OrderLineItemModel(id={self.id}, order_id={self.order_id}, "
            f"sku={self.sku}, quantity={self.quantity})>"
        )


class OrderNumberCounterModel(Base):
    """ORM model for order_number_counters table.

    One row per tenant holding the last issued order number value. Only
    ever touched by the gate's atomic upsert-increment.
    """

    __tablename__ = "order_number_counters"

    tenant_id: Mapped[str] = mapped_column(String(26), primary_key=True)
    last_value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<OrderNumberCounterModel(tenant_id={self.tenant_id}, "
            f"last_value={self.last_value})>"
        )
