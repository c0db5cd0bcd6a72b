"""Cart validation against the live catalog.

Validation is a read: it prices every line from the catalog of the bound
tenant and reports every rejected line at once, so a shopper can fix the
whole cart in one pass. The same validator runs again inside the order
transaction; its result is never cached.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from catalog.domain.value_objects import PurchasableItem
from catalog.ports.repositories import ICatalogRepository
from ordering.application.observability import (
    CartValidationProbe,
    DefaultCartValidationProbe,
)
from ordering.domain.value_objects import (
    ZERO,
    CartErrorCode,
    CartLine,
    CartLineError,
    ValidatedCart,
    ValidatedCartLine,
    round_money,
)
from shared_kernel.tenancy import tenant_scope


class CartValidator:
    """Checks cart lines for availability, quantity and stock."""

    def __init__(
        self,
        catalog: ICatalogRepository,
        probe: CartValidationProbe | None = None,
    ):
        """Initialize CartValidator.

        Args:
            catalog: Catalog reads, bound to the caller's session
            probe: Optional domain probe for observability
        """
        self._catalog = catalog
        self._probe = probe or DefaultCartValidationProbe()

    async def validate(self, tenant_id: str, lines: Sequence[CartLine]) -> ValidatedCart:
        """Validate every line of a cart for ``tenant_id``.

        Lines that pass are priced from the catalog; the shopper-supplied
        ``unit_price`` is ignored. Lines that fail are itemized with a code
        and a display message.

        Args:
            tenant_id: Tenant whose catalog the cart is checked against
            lines: Requested cart lines

        Returns:
            ValidatedCart holding accepted lines, errors and the subtotal
        """
        accepted: list[ValidatedCartLine] = []
        errors: list[CartLineError] = []
        subtotal = ZERO

        with tenant_scope(tenant_id):
            for line in lines:
                outcome = await self._check_line(line)
                if isinstance(outcome, CartLineError):
                    self._probe.cart_line_rejected(
                        product_id=outcome.product_id,
                        variant_id=outcome.variant_id,
                        code=outcome.code.value,
                    )
                    errors.append(outcome)
                    continue

                accepted.append(outcome)
                subtotal += outcome.unit_price * outcome.quantity

        cart = ValidatedCart(
            lines=tuple(accepted),
            errors=tuple(errors),
            subtotal=round_money(subtotal),
        )
        self._probe.cart_validated(
            accepted_lines=len(cart.lines),
            rejected_lines=len(cart.errors),
            subtotal=str(cart.subtotal),
            is_valid=cart.is_valid,
        )
        return cart

    async def _check_line(self, line: CartLine) -> ValidatedCartLine | CartLineError:
        product = await self._catalog.get_product(line.product_id)
        if product is None or not product.is_purchasable:
            return CartLineError(
                product_id=line.product_id,
                variant_id=line.variant_id,
                code=CartErrorCode.PRODUCT_UNAVAILABLE,
                message=f"Product {line.product_id} not found or unavailable",
            )

        variant = None
        if line.variant_id is not None:
            variant = await self._catalog.get_variant(product.id, line.variant_id)
            if variant is None or variant.is_deleted:
                return CartLineError(
                    product_id=line.product_id,
                    variant_id=line.variant_id,
                    code=CartErrorCode.VARIANT_UNAVAILABLE,
                    message=f"Variant {line.variant_id} not found for product {product.name}",
                )

        item = PurchasableItem.resolve(product, variant)

        if line.quantity <= 0:
            return CartLineError(
                product_id=line.product_id,
                variant_id=line.variant_id,
                code=CartErrorCode.INVALID_QUANTITY,
                message=f"Invalid quantity for {product.name}",
            )

        if item.track_inventory and line.quantity > item.available_stock:
            return CartLineError(
                product_id=line.product_id,
                variant_id=line.variant_id,
                code=CartErrorCode.INSUFFICIENT_STOCK,
                message=(
                    f"Insufficient stock for {product.name}. "
                    f"Available: {item.available_stock}, Requested: {line.quantity}"
                ),
            )

        return ValidatedCartLine(
            product_id=item.product_id,
            product_name=item.product_name,
            sku=item.sku,
            unit_price=Decimal(item.unit_price),
            quantity=line.quantity,
            available_stock=item.available_stock,
            track_inventory=item.track_inventory,
            variant_id=item.variant_id,
            variant_name=item.variant_name,
            image=item.image,
        )
