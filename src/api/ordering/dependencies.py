"""Dependency injection for the ordering bounded context.

Composes infrastructure resources (session factories, settings, the audit
recorder) with ordering components (validator, fulfillment service,
pricing lookups).
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from audit.application.recorder import AuditTrailRecorder
from audit.dependencies import get_audit_recorder
from catalog.infrastructure.catalog_repository import CatalogRepository
from infrastructure.database.dependencies import get_read_session, get_write_sessionmaker
from infrastructure.database.tenant_gate import TenantScopedGate
from infrastructure.settings import CheckoutSettings, get_checkout_settings
from ordering.application.observability import (
    CartValidationProbe,
    DefaultCartValidationProbe,
    DefaultOrderFulfillmentProbe,
    OrderFulfillmentProbe,
)
from ordering.application.services import CartValidator, OrderFulfillmentService
from ordering.infrastructure.checkout_repositories import CheckoutRepositoriesFactory
from ordering.infrastructure.pricing import FlatRateShipping, NoDiscounts, RegionalTaxRates
from ordering.ports.pricing import DiscountResolver, ShippingRateLookup, TaxRateLookup
from ordering.presentation.observability import CheckoutApiProbe, DefaultCheckoutApiProbe


def get_cart_validation_probe() -> CartValidationProbe:
    """Get CartValidationProbe instance."""
    return DefaultCartValidationProbe()


def get_order_fulfillment_probe() -> OrderFulfillmentProbe:
    """Get OrderFulfillmentProbe instance."""
    return DefaultOrderFulfillmentProbe()


def get_checkout_api_probe() -> CheckoutApiProbe:
    """Get CheckoutApiProbe instance."""
    return DefaultCheckoutApiProbe()


def get_tax_rates(
    settings: Annotated[CheckoutSettings, Depends(get_checkout_settings)],
) -> TaxRateLookup:
    """Get the regional tax table configured in CheckoutSettings."""
    return RegionalTaxRates(settings.tax_rates)


def get_shipping_rates() -> ShippingRateLookup:
    """Get the shipping rate lookup."""
    return FlatRateShipping()


def get_discount_resolver() -> DiscountResolver:
    """Get the discount resolver. No discount programs are configured."""
    return NoDiscounts()


def get_cart_validator(
    session: Annotated[AsyncSession, Depends(get_read_session)],
    probe: Annotated[CartValidationProbe, Depends(get_cart_validation_probe)],
) -> CartValidator:
    """Get a CartValidator reading the catalog through a read session.

    Args:
        session: Read session for catalog lookups
        probe: Cart validation probe for observability

    Returns:
        CartValidator instance
    """
    return CartValidator(CatalogRepository(TenantScopedGate(session)), probe=probe)


def get_order_fulfillment_service(
    session_factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_write_sessionmaker)],
    settings: Annotated[CheckoutSettings, Depends(get_checkout_settings)],
    tax_rates: Annotated[TaxRateLookup, Depends(get_tax_rates)],
    discounts: Annotated[DiscountResolver, Depends(get_discount_resolver)],
    audit: Annotated[AuditTrailRecorder, Depends(get_audit_recorder)],
    probe: Annotated[OrderFulfillmentProbe, Depends(get_order_fulfillment_probe)],
    validation_probe: Annotated[CartValidationProbe, Depends(get_cart_validation_probe)],
) -> OrderFulfillmentService:
    """Get OrderFulfillmentService instance.

    The service opens one write session per transaction attempt, so it is
    handed the session factory rather than a request-scoped session.

    Returns:
        OrderFulfillmentService instance
    """
    return OrderFulfillmentService(
        session_factory=session_factory,
        repositories_factory=CheckoutRepositoriesFactory(settings),
        tax_rates=tax_rates,
        discounts=discounts,
        audit=audit,
        settings=settings,
        probe=probe,
        validation_probe=validation_probe,
    )
