"""Ports (interfaces) for the ordering bounded context.

Ports define the contracts for repositories and pricing collaborators
without specifying implementation details.
"""

from ordering.ports.exceptions import (
    CartInvalid,
    InsufficientStock,
    InternalError,
    OrderingError,
    OrderNumberConflict,
    TransactionTimeout,
)
from ordering.ports.pricing import DiscountResolver, ShippingRateLookup, TaxRateLookup
from ordering.ports.repositories import (
    CheckoutRepositories,
    IAddressRepository,
    IOrderNumberSequence,
    IOrderRepository,
)

__all__ = [
    "CartInvalid",
    "CheckoutRepositories",
    "DiscountResolver",
    "IAddressRepository",
    "IOrderNumberSequence",
    "IOrderRepository",
    "InsufficientStock",
    "InternalError",
    "OrderNumberConflict",
    "OrderingError",
    "ShippingRateLookup",
    "TaxRateLookup",
    "TransactionTimeout",
]
