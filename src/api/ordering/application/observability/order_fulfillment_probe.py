"""Protocol for order fulfillment observability.

Defines the interface for domain probes that capture the lifecycle of the
order transaction: success, expected rejections and internal failures.
Internal failures always carry the correlation id handed to the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class OrderFulfillmentProbe(Protocol):
    """Domain probe for order fulfillment operations."""

    def order_created(
        self,
        order_id: str,
        order_number: str,
        total_amount: str,
        line_item_count: int,
    ) -> None:
        """Record that an order was committed."""
        ...

    def cart_rejected(self, error_count: int, stock_shortage: bool) -> None:
        """Record that the cart failed re-validation inside the transaction."""
        ...

    def stock_exhausted_at_commit(
        self,
        product_id: str,
        variant_id: str | None,
        quantity: int,
    ) -> None:
        """Record that the guarded decrement found too little stock."""
        ...

    def order_number_conflict(self, order_number: str, attempt: int) -> None:
        """Record that an order number collided and the transaction will retry."""
        ...

    def order_number_attempts_exhausted(self, attempts: int, correlation_id: str) -> None:
        """Record that every order number attempt collided."""
        ...

    def transaction_timed_out(self, timeout_seconds: float, correlation_id: str) -> None:
        """Record that the order transaction exceeded its time budget."""
        ...

    def transaction_failed(self, error: str, correlation_id: str) -> None:
        """Record an unexpected storage failure."""
        ...

    def with_context(self, context: ObservationContext) -> OrderFulfillmentProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultOrderFulfillmentProbe:
    """Default implementation of OrderFulfillmentProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultOrderFulfillmentProbe:
        """Create a new probe with observation context bound."""
        return DefaultOrderFulfillmentProbe(logger=self._logger, context=context)

    def order_created(
        self,
        order_id: str,
        order_number: str,
        total_amount: str,
        line_item_count: int,
    ) -> None:
        """Record that an order was committed."""
        self._logger.info(
            "order_created",
            order_id=order_id,
            order_number=order_number,
            total_amount=total_amount,
            line_item_count=line_item_count,
            **self._get_context_kwargs(),
        )

    def cart_rejected(self, error_count: int, stock_shortage: bool) -> None:
        """Record that the cart failed re-validation inside the transaction."""
        self._logger.info(
            "order_cart_rejected",
            error_count=error_count,
            stock_shortage=stock_shortage,
            **self._get_context_kwargs(),
        )

    def stock_exhausted_at_commit(
        self,
        product_id: str,
        variant_id: str | None,
        quantity: int,
    ) -> None:
        """Record that the guarded decrement found too little stock."""
        self._logger.info(
            "order_stock_exhausted_at_commit",
            product_id=product_id,
            variant_id=variant_id,
            quantity=quantity,
            **self._get_context_kwargs(),
        )

    def order_number_conflict(self, order_number: str, attempt: int) -> None:
        """Record that an order number collided and the transaction will retry."""
        self._logger.warning(
            "order_number_conflict",
            order_number=order_number,
            attempt=attempt,
            **self._get_context_kwargs(),
        )

    def order_number_attempts_exhausted(self, attempts: int, correlation_id: str) -> None:
        """Record that every order number attempt collided."""
        self._logger.error(
            "order_number_attempts_exhausted",
            attempts=attempts,
            correlation_id=correlation_id,
            **self._get_context_kwargs(),
        )

    def transaction_timed_out(self, timeout_seconds: float, correlation_id: str) -> None:
        """Record that the order transaction exceeded its time budget."""
        self._logger.error(
            "order_transaction_timed_out",
            timeout_seconds=timeout_seconds,
            correlation_id=correlation_id,
            **self._get_context_kwargs(),
        )

    def transaction_failed(self, error: str, correlation_id: str) -> None:
        """Record an unexpected storage failure."""
        self._logger.error(
            "order_transaction_failed",
            error=error,
            correlation_id=correlation_id,
            **self._get_context_kwargs(),
        )
