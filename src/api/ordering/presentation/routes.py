"""HTTP routes for checkout and order placement.

The tenant is bound by TenantContextMiddleware before any of these handlers
run; handlers read it back with ``require_tenant``.
"""

from __future__ import annotations

from typing import Annotated, NoReturn

from fastapi import APIRouter, Depends, HTTPException, Request, status
from ulid import ULID

from ordering.application.services import (
    CartValidator,
    CreateOrderInput,
    OrderFulfillmentService,
)
from ordering.dependencies import (
    get_cart_validator,
    get_checkout_api_probe,
    get_order_fulfillment_service,
    get_shipping_rates,
)
from ordering.ports.exceptions import (
    GENERIC_ORDER_FAILURE,
    CartInvalid,
    InsufficientStock,
    InternalError,
)
from ordering.ports.pricing import ShippingRateLookup
from ordering.presentation.models import (
    CartLineErrorResponse,
    CreateOrderRequest,
    OrderResponse,
    ShippingOptionResponse,
    ShippingOptionsRequest,
    ValidateCartRequest,
    ValidatedCartResponse,
)
from ordering.presentation.observability import CheckoutApiProbe
from ordering.presentation.request_metadata import extract_request_metadata
from shared_kernel.tenancy import TenantContextMissing, require_tenant

router = APIRouter(tags=["checkout"])


def _raise_cart_error(error: CartInvalid, status_code: int) -> NoReturn:
    raise HTTPException(
        status_code=status_code,
        detail={
            "message": str(error),
            "errors": [
                CartLineErrorResponse.from_domain(line_error).model_dump()
                for line_error in error.errors
            ],
        },
    ) from error


def _raise_internal_error(correlation_id: str) -> NoReturn:
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"message": GENERIC_ORDER_FAILURE, "correlation_id": correlation_id},
    )


def _raise_unexpected_error(probe: CheckoutApiProbe, operation: str, error: Exception) -> NoReturn:
    if isinstance(error, TenantContextMissing):
        probe.tenant_context_missing(operation)
    correlation_id = str(ULID())
    probe.request_failed(operation=operation, error=repr(error), correlation_id=correlation_id)
    _raise_internal_error(correlation_id)


@router.post("/checkout/validate")
async def validate_cart(
    request: ValidateCartRequest,
    validator: Annotated[CartValidator, Depends(get_cart_validator)],
    probe: Annotated[CheckoutApiProbe, Depends(get_checkout_api_probe)],
) -> ValidatedCartResponse:
    """Validate a cart against the live catalog.

    Always answers 200: rejected lines are part of the response body.

    Raises:
        HTTPException: 500 for unexpected errors
    """
    try:
        tenant = require_tenant("validate_cart")
        cart = await validator.validate(
            tenant.tenant_id,
            [line.to_domain() for line in request.lines],
        )
        return ValidatedCartResponse.from_domain(cart)

    except Exception as e:
        _raise_unexpected_error(probe, "validate_cart", e)


@router.post("/checkout/shipping-options")
async def quote_shipping_options(
    request: ShippingOptionsRequest,
    validator: Annotated[CartValidator, Depends(get_cart_validator)],
    shipping: Annotated[ShippingRateLookup, Depends(get_shipping_rates)],
    probe: Annotated[CheckoutApiProbe, Depends(get_checkout_api_probe)],
) -> list[ShippingOptionResponse]:
    """Quote shipping options for a cart and destination.

    The free shipping threshold is checked against the catalog-priced
    subtotal of the accepted lines.

    Raises:
        HTTPException: 500 for unexpected errors
    """
    try:
        tenant = require_tenant("quote_shipping_options")
        cart = await validator.validate(
            tenant.tenant_id,
            [line.to_domain() for line in request.lines],
        )
        options = shipping.quote_shipping(
            request.shipping_address.to_domain(),
            cart_weight=cart.total_quantity,
            subtotal=cart.subtotal,
        )
        return [ShippingOptionResponse.from_domain(option) for option in options]

    except Exception as e:
        _raise_unexpected_error(probe, "quote_shipping_options", e)


@router.post(
    "/orders",
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Order placed"},
        409: {"description": "Stock ran out for at least one line"},
        422: {"description": "Cart failed validation"},
        500: {"description": "Order could not be completed"},
    },
)
async def create_order(
    request: CreateOrderRequest,
    http_request: Request,
    service: Annotated[OrderFulfillmentService, Depends(get_order_fulfillment_service)],
    probe: Annotated[CheckoutApiProbe, Depends(get_checkout_api_probe)],
) -> OrderResponse:
    """Place an order for the submitted cart.

    Raises:
        HTTPException: 409 with itemized errors if stock ran out
        HTTPException: 422 with itemized errors if the cart is invalid
        HTTPException: 500 with a correlation id for internal failures
    """
    try:
        tenant = require_tenant("create_order")
        order = await service.create_order(
            CreateOrderInput(
                tenant_id=tenant.tenant_id,
                customer_id=request.customer_id,
                user_id=tenant.actor_id,
                lines=[line.to_domain() for line in request.lines],
                shipping_address=request.shipping_address.to_domain(),
                billing_address=(
                    request.billing_address.to_domain()
                    if request.billing_address is not None
                    else None
                ),
                shipping_method=request.shipping_method,
                shipping_cost=request.shipping_cost,
                discount_code=request.discount_code,
                customer_note=request.customer_note,
                request_metadata=extract_request_metadata(http_request),
            )
        )
        return OrderResponse.from_domain(order)

    except InsufficientStock as e:
        _raise_cart_error(e, status.HTTP_409_CONFLICT)
    except CartInvalid as e:
        _raise_cart_error(e, status.HTTP_422_UNPROCESSABLE_ENTITY)
    except InternalError as e:
        _raise_internal_error(e.correlation_id)
    except Exception as e:
        _raise_unexpected_error(probe, "create_order", e)
