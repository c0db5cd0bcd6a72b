"""Exceptions for the ordering bounded context.

``CartInvalid`` and ``InsufficientStock`` are expected outcomes that carry
itemized, user-displayable errors. ``InternalError`` is everything else; it
carries only a correlation id that support can look up in the logs.
"""

from __future__ import annotations

from collections.abc import Sequence

from ulid import ULID

from ordering.domain.value_objects import CartLineError

GENERIC_ORDER_FAILURE = "Could not complete your order"


class OrderingError(Exception):
    """Base class for ordering failures."""


class CartInvalid(OrderingError):
    """Raised when a cart fails validation.

    Attributes:
        errors: Every rejected line, not just the first one
    """

    def __init__(self, errors: Sequence[CartLineError], message: str | None = None):
        self.errors: tuple[CartLineError, ...] = tuple(errors)
        if message is None:
            message = "Cart validation failed: " + "; ".join(e.message for e in self.errors)
        super().__init__(message)


class InsufficientStock(CartInvalid):
    """Raised when stock ran out, either at validation or at the guarded decrement.

    Retryable by the shopper (with a smaller quantity), never by the system.
    """


class OrderNumberConflict(OrderingError):
    """Raised when the order number is already taken for the tenant.

    Internal only: the fulfillment service retries the whole transaction a
    bounded number of times before surfacing an InternalError.
    """

    def __init__(self, order_number: str):
        self.order_number = order_number
        super().__init__(f"Order number {order_number} already exists")


class InternalError(OrderingError):
    """Raised for unexpected storage or infrastructure failures.

    The message shown to users is always generic; ``correlation_id`` ties
    the response to the error log entry.
    """

    def __init__(
        self,
        message: str = GENERIC_ORDER_FAILURE,
        correlation_id: str | None = None,
    ):
        self.correlation_id = correlation_id or str(ULID())
        super().__init__(message)


class TransactionTimeout(InternalError):
    """Raised when the order transaction exceeded its time budget."""
