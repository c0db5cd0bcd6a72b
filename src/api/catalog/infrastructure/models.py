"""SQLAlchemy ORM models for the catalog bounded context.

Only the columns checkout depends on are mapped here. All three tables are
tenant-owned and must be accessed through the tenant-scoped gate.
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column

from catalog.domain.value_objects import InventoryStatus
from infrastructure.database.models import (
    Base,
    CreatedAtMixin,
    SoftDeleteMixin,
    TenantOwnedMixin,
    TimestampMixin,
)


class ProductModel(Base, TenantOwnedMixin, TimestampMixin, SoftDeleteMixin):
    """ORM model for products table.

    ``inventory_qty`` is the product-level stock, used when the product is
    sold without a variant. The CHECK constraint backs the non-negative
    stock invariant at the storage layer.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    sku: Mapped[str] = mapped_column(String(100), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    inventory_qty: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    track_inventory: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    low_stock_threshold: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    inventory_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=InventoryStatus.IN_STOCK.value
    )
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    thumbnail_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    __table_args__ = (
        CheckConstraint("inventory_qty >= 0", name="inventory_qty_non_negative"),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<ProductModel(id={self.id}, tenant_id={self.tenant_id}, "
            f"sku={self.sku}, inventory_qty={self.inventory_qty})>"
        )


class ProductVariantModel(Base, TenantOwnedMixin, TimestampMixin, SoftDeleteMixin):
    """ORM model for product_variants table.

    Nullable ``price`` and ``track_inventory`` inherit from the parent product.
    """

    __tablename__ = "product_variants"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    product_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    sku: Mapped[str] = mapped_column(String(100), nullable=False)
    price: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    stock_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    track_inventory: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    low_stock_threshold: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    inventory_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=InventoryStatus.IN_STOCK.value
    )
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)

    __table_args__ = (
        CheckConstraint("stock_quantity >= 0", name="stock_quantity_non_negative"),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<ProductVariantModel(id={self.id}, product_id={self.product_id}, "
            f"sku={self.sku}, stock_quantity={self.stock_quantity})>"
        )


class InventoryLogModel(Base, TenantOwnedMixin, CreatedAtMixin):
    """ORM model for inventory_logs table.

    Append-only history of every stock change, written in the same
    transaction as the change itself.
    """

    __tablename__ = "inventory_logs"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    product_id: Mapped[str] = mapped_column(String(26), nullable=False, index=True)
    variant_id: Mapped[str | None] = mapped_column(String(26), nullable=True)
    previous_qty: Mapped[int] = mapped_column(Integer, nullable=False)
    new_qty: Mapped[int] = mapped_column(Integer, nullable=False)
    change_qty: Mapped[int] = mapped_column(Integer, nullable=False)
    reason: Mapped[str] = mapped_column(String(50), nullable=False)
    order_id: Mapped[str | None] = mapped_column(String(26), nullable=True, index=True)
    user_id: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<InventoryLogModel(id={self.id}, product_id={self.product_id}, "
            f"change_qty={self.change_qty}, reason={self.reason})>"
        )
