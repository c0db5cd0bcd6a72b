"""Domain-Oriented Observability for the ordering application layer."""

from ordering.application.observability.cart_validation_probe import (
    CartValidationProbe,
    DefaultCartValidationProbe,
)
from ordering.application.observability.order_fulfillment_probe import (
    DefaultOrderFulfillmentProbe,
    OrderFulfillmentProbe,
)

__all__ = [
    "CartValidationProbe",
    "DefaultCartValidationProbe",
    "DefaultOrderFulfillmentProbe",
    "OrderFulfillmentProbe",
]
