"""Default in-process pricing collaborators.

These are deliberately simple: flat regional tax rates and mock shipping
quotes. Real tax and carrier integrations plug in behind the same
protocols.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal

from ordering.domain.value_objects import ZERO, PostalAddress, ShippingOption, round_money
from ordering.ports.pricing import DiscountResolver, ShippingRateLookup, TaxRateLookup

FREE_SHIPPING_THRESHOLD = Decimal("50.00")


class RegionalTaxRates(TaxRateLookup):
    """Tax rate table keyed by the shipping address region code."""

    def __init__(self, rates: Mapping[str, Decimal]) -> None:
        self._rates = {region.upper(): Decimal(rate) for region, rate in rates.items()}

    def rate_for(self, address: PostalAddress) -> Decimal:
        if not address.region:
            return ZERO
        return self._rates.get(address.region.upper(), ZERO)

    def quote_tax(self, address: PostalAddress, subtotal: Decimal) -> Decimal:
        return round_money(subtotal * self.rate_for(address))


class FlatRateShipping(ShippingRateLookup):
    """Flat domestic and international rates, plus free domestic shipping
    once the subtotal reaches the threshold."""

    def __init__(
        self,
        domestic_country: str = "US",
        free_shipping_threshold: Decimal = FREE_SHIPPING_THRESHOLD,
    ) -> None:
        self._domestic_country = domestic_country.upper()
        self._free_shipping_threshold = free_shipping_threshold

    def quote_shipping(
        self,
        address: PostalAddress,
        cart_weight: int,
        subtotal: Decimal,
    ) -> list[ShippingOption]:
        is_domestic = address.country.upper() == self._domestic_country

        if is_domestic:
            options = [
                ShippingOption(
                    id="standard",
                    name="Standard Shipping",
                    description="5-7 business days",
                    cost=Decimal("5.99"),
                    estimated_days="5-7 days",
                ),
                ShippingOption(
                    id="express",
                    name="Express Shipping",
                    description="2-3 business days",
                    cost=Decimal("12.99"),
                    estimated_days="2-3 days",
                ),
            ]
        else:
            options = [
                ShippingOption(
                    id="standard",
                    name="International Standard",
                    description="10-15 business days",
                    cost=Decimal("15.99"),
                    estimated_days="10-15 days",
                ),
                ShippingOption(
                    id="express",
                    name="International Express",
                    description="5-7 business days",
                    cost=Decimal("29.99"),
                    estimated_days="5-7 days",
                ),
            ]

        if is_domestic and cart_weight > 0 and subtotal >= self._free_shipping_threshold:
            options.append(
                ShippingOption(
                    id="free",
                    name="Free Shipping",
                    description="7-10 business days",
                    cost=ZERO,
                    estimated_days="7-10 days",
                )
            )

        return sorted(options, key=lambda option: option.cost)


class NoDiscounts(DiscountResolver):
    """Discount resolver that never applies a discount."""

    def resolve(self, code: str | None, subtotal: Decimal) -> Decimal:
        return ZERO
