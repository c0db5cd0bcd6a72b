"""Value objects for the ordering domain.

Money is always ``Decimal`` rounded half-up to cents; floats never enter the
ordering domain.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import StrEnum

from ulid import ULID

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def round_money(amount: Decimal | int | str) -> Decimal:
    """Round an amount half-up to two decimal places."""
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


class OrderStatus(StrEnum):
    """Fulfillment state of an order."""

    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELED = "CANCELED"


class PaymentStatus(StrEnum):
    """Payment state of an order. Capture happens outside this service."""

    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


class AddressType(StrEnum):
    SHIPPING = "SHIPPING"
    BILLING = "BILLING"


class CartErrorCode(StrEnum):
    """Why a cart line was rejected."""

    PRODUCT_UNAVAILABLE = "PRODUCT_UNAVAILABLE"
    VARIANT_UNAVAILABLE = "VARIANT_UNAVAILABLE"
    INVALID_QUANTITY = "INVALID_QUANTITY"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"


@dataclass(frozen=True)
class OrderId:
    """Identifier for an Order aggregate.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> OrderId:
        """Generate a new OrderId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> OrderId:
        """Create OrderId from string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid OrderId: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class CartLine:
    """One requested line of a cart.

    ``unit_price`` is the price the shopper was shown. It is kept for
    display only; validation always prices the line from the live catalog.
    """

    product_id: str
    quantity: int
    variant_id: str | None = None
    unit_price: Decimal | None = None


@dataclass(frozen=True)
class CartLineError:
    """A rejected cart line, itemized for display."""

    product_id: str
    code: CartErrorCode
    message: str
    variant_id: str | None = None


@dataclass(frozen=True)
class ValidatedCartLine:
    """A cart line accepted against the live catalog."""

    product_id: str
    product_name: str
    sku: str
    unit_price: Decimal
    quantity: int
    available_stock: int
    track_inventory: bool
    variant_id: str | None = None
    variant_name: str | None = None
    image: str | None = None

    @property
    def line_subtotal(self) -> Decimal:
        return round_money(self.unit_price * self.quantity)


@dataclass(frozen=True)
class ValidatedCart:
    """Result of validating a cart. Never cached: stock moves."""

    lines: tuple[ValidatedCartLine, ...]
    errors: tuple[CartLineError, ...]
    subtotal: Decimal

    @property
    def is_valid(self) -> bool:
        """True only with zero errors and at least one accepted line."""
        return not self.errors and len(self.lines) > 0

    @property
    def is_stock_shortage(self) -> bool:
        """True when every error is an insufficient-stock error."""
        return bool(self.errors) and all(
            error.code is CartErrorCode.INSUFFICIENT_STOCK for error in self.errors
        )

    @property
    def total_quantity(self) -> int:
        return sum(line.quantity for line in self.lines)


@dataclass(frozen=True)
class PostalAddress:
    """Postal address captured at checkout.

    ``region`` is the state or province code used for tax lookups.
    """

    name: str
    line1: str
    city: str
    postal_code: str
    country: str
    line2: str | None = None
    region: str | None = None
    phone: str | None = None


@dataclass(frozen=True)
class ShippingOption:
    """A quoted shipping method."""

    id: str
    name: str
    description: str
    cost: Decimal
    estimated_days: str


@dataclass(frozen=True)
class RequestMetadata:
    """Caller details forwarded by the request layer."""

    ip_address: str = "unknown"
    user_agent: str = "unknown"
