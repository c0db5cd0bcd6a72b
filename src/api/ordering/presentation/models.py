"""Pydantic models for checkout and order API requests and responses."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from ordering.domain.aggregates import Order, OrderLineItem
from ordering.domain.value_objects import (
    CartLine,
    CartLineError,
    PostalAddress,
    ShippingOption,
    ValidatedCart,
    ValidatedCartLine,
)

MAX_LINE_QUANTITY = 10_000


class CartLineRequest(BaseModel):
    """One requested cart line.

    ``quantity`` has no lower bound here: non-positive quantities are
    reported as itemized cart errors rather than request errors. The upper
    bound keeps quantities within the range of an INTEGER column.
    """

    product_id: str = Field(..., description="Product ID", min_length=1)
    variant_id: str | None = Field(default=None, description="Variant ID, if any")
    quantity: int = Field(..., description="Requested quantity", le=MAX_LINE_QUANTITY)
    unit_price: Decimal | None = Field(
        default=None,
        description="Price shown to the shopper; ignored for pricing",
    )

    def to_domain(self) -> CartLine:
        return CartLine(
            product_id=self.product_id,
            variant_id=self.variant_id,
            quantity=self.quantity,
            unit_price=self.unit_price,
        )


class AddressRequest(BaseModel):
    """Postal address supplied at checkout."""

    name: str = Field(..., min_length=1, max_length=255)
    line1: str = Field(..., min_length=1, max_length=255)
    line2: str | None = Field(default=None, max_length=255)
    city: str = Field(..., min_length=1, max_length=120)
    region: str | None = Field(default=None, max_length=120, description="State or province code")
    postal_code: str = Field(..., min_length=1, max_length=20)
    country: str = Field(..., min_length=2, max_length=2, description="ISO 3166-1 alpha-2 code")
    phone: str | None = Field(default=None, max_length=40)

    def to_domain(self) -> PostalAddress:
        return PostalAddress(
            name=self.name,
            line1=self.line1,
            line2=self.line2,
            city=self.city,
            region=self.region,
            postal_code=self.postal_code,
            country=self.country.upper(),
            phone=self.phone,
        )


class ValidateCartRequest(BaseModel):
    """Request model for validating a cart."""

    lines: list[CartLineRequest] = Field(..., description="Cart lines")


class ShippingOptionsRequest(BaseModel):
    """Request model for quoting shipping options."""

    shipping_address: AddressRequest
    lines: list[CartLineRequest] = Field(..., description="Cart lines")


class CreateOrderRequest(BaseModel):
    """Request model for placing an order."""

    lines: list[CartLineRequest] = Field(..., description="Cart lines")
    shipping_address: AddressRequest
    billing_address: AddressRequest | None = Field(
        default=None,
        description="Billing address; defaults to the shipping address",
    )
    shipping_method: str = Field(..., min_length=1, max_length=50)
    shipping_cost: Decimal = Field(..., ge=0, description="Cost of the chosen shipping option")
    customer_id: str | None = Field(default=None)
    discount_code: str | None = Field(default=None, max_length=50)
    customer_note: str | None = Field(default=None, max_length=1000)


class CartLineErrorResponse(BaseModel):
    """An itemized cart error."""

    product_id: str
    variant_id: str | None
    code: str
    message: str

    @classmethod
    def from_domain(cls, error: CartLineError) -> CartLineErrorResponse:
        return cls(
            product_id=error.product_id,
            variant_id=error.variant_id,
            code=error.code.value,
            message=error.message,
        )


class ValidatedCartLineResponse(BaseModel):
    """An accepted cart line, priced from the catalog."""

    product_id: str
    variant_id: str | None
    product_name: str
    variant_name: str | None
    sku: str
    image: str | None
    unit_price: Decimal
    quantity: int
    available_stock: int
    line_subtotal: Decimal

    @classmethod
    def from_domain(cls, line: ValidatedCartLine) -> ValidatedCartLineResponse:
        return cls(
            product_id=line.product_id,
            variant_id=line.variant_id,
            product_name=line.product_name,
            variant_name=line.variant_name,
            sku=line.sku,
            image=line.image,
            unit_price=line.unit_price,
            quantity=line.quantity,
            available_stock=line.available_stock,
            line_subtotal=line.line_subtotal,
        )


class ValidatedCartResponse(BaseModel):
    """Response model for cart validation."""

    is_valid: bool
    lines: list[ValidatedCartLineResponse]
    errors: list[CartLineErrorResponse]
    subtotal: Decimal

    @classmethod
    def from_domain(cls, cart: ValidatedCart) -> ValidatedCartResponse:
        return cls(
            is_valid=cart.is_valid,
            lines=[ValidatedCartLineResponse.from_domain(line) for line in cart.lines],
            errors=[CartLineErrorResponse.from_domain(error) for error in cart.errors],
            subtotal=cart.subtotal,
        )


class ShippingOptionResponse(BaseModel):
    """A quoted shipping option."""

    id: str
    name: str
    description: str
    cost: Decimal
    estimated_days: str

    @classmethod
    def from_domain(cls, option: ShippingOption) -> ShippingOptionResponse:
        return cls(
            id=option.id,
            name=option.name,
            description=option.description,
            cost=option.cost,
            estimated_days=option.estimated_days,
        )


class OrderLineItemResponse(BaseModel):
    """Response model for an order line item."""

    id: str
    product_id: str
    variant_id: str | None
    product_name: str
    variant_name: str | None
    sku: str
    unit_price: Decimal
    quantity: int
    line_subtotal: Decimal

    @classmethod
    def from_domain(cls, item: OrderLineItem) -> OrderLineItemResponse:
        return cls(
            id=item.id,
            product_id=item.product_id,
            variant_id=item.variant_id,
            product_name=item.product_name,
            variant_name=item.variant_name,
            sku=item.sku,
            unit_price=item.unit_price,
            quantity=item.quantity,
            line_subtotal=item.line_subtotal,
        )


class OrderResponse(BaseModel):
    """Response model for a placed order."""

    id: str = Field(..., description="Order ID (ULID format)")
    order_number: str
    status: str
    payment_status: str
    subtotal: Decimal
    tax_amount: Decimal
    shipping_amount: Decimal
    discount_amount: Decimal
    total_amount: Decimal
    shipping_method: str
    line_items: list[OrderLineItemResponse]
    created_at: datetime

    @classmethod
    def from_domain(cls, order: Order) -> OrderResponse:
        """Convert domain Order aggregate to API response."""
        return cls(
            id=order.id.value,
            order_number=order.order_number,
            status=order.status.value,
            payment_status=order.payment_status.value,
            subtotal=order.subtotal,
            tax_amount=order.tax_amount,
            shipping_amount=order.shipping_amount,
            discount_amount=order.discount_amount,
            total_amount=order.total_amount,
            shipping_method=order.shipping_method,
            line_items=[OrderLineItemResponse.from_domain(item) for item in order.line_items],
            created_at=order.created_at,
        )
