"""Pricing collaborator protocols.

Tax, shipping and discounts are external concerns. The default
implementations are in-process tables, so calling them inside the order
transaction adds no network I/O.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol, runtime_checkable

from ordering.domain.value_objects import PostalAddress, ShippingOption


@runtime_checkable
class TaxRateLookup(Protocol):
    """Quotes tax for a shipping address."""

    def quote_tax(self, address: PostalAddress, subtotal: Decimal) -> Decimal:
        """Return the tax amount, or zero when no rate applies to the region."""
        ...


@runtime_checkable
class ShippingRateLookup(Protocol):
    """Quotes shipping options for a destination."""

    def quote_shipping(
        self,
        address: PostalAddress,
        cart_weight: int,
        subtotal: Decimal,
    ) -> list[ShippingOption]:
        """Return the available shipping options, cheapest first."""
        ...


@runtime_checkable
class DiscountResolver(Protocol):
    """Resolves a discount code into an amount."""

    def resolve(self, code: str | None, subtotal: Decimal) -> Decimal:
        """Return the discount for ``code``, or zero when it does not apply."""
        ...
