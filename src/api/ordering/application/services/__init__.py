"""Application services for the ordering bounded context."""

from ordering.application.services.cart_validator import CartValidator
from ordering.application.services.order_fulfillment_service import (
    CreateOrderInput,
    OrderFulfillmentService,
)

__all__ = [
    "CartValidator",
    "CreateOrderInput",
    "OrderFulfillmentService",
]
