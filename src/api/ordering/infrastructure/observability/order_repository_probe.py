"""Domain probe for order repository operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class OrderRepositoryProbe(Protocol):
    """Domain probe for order persistence."""

    def order_saved(self, order_id: str, order_number: str, line_item_count: int) -> None:
        """Record that an order and its line items were written."""
        ...

    def order_retrieved(self, order_id: str) -> None:
        """Record that an order was retrieved."""
        ...

    def order_not_found(self, order_id: str) -> None:
        """Record that an order was not found."""
        ...

    def duplicate_order_number(self, order_number: str) -> None:
        """Record that an order number was already taken."""
        ...

    def with_context(self, context: ObservationContext) -> OrderRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultOrderRepositoryProbe:
    """Default implementation of OrderRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultOrderRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultOrderRepositoryProbe(logger=self._logger, context=context)

    def order_saved(self, order_id: str, order_number: str, line_item_count: int) -> None:
        """Record that an order and its line items were written."""
        self._logger.debug(
            "order_saved",
            order_id=order_id,
            order_number=order_number,
            line_item_count=line_item_count,
            **self._get_context_kwargs(),
        )

    def order_retrieved(self, order_id: str) -> None:
        """Record that an order was retrieved."""
        self._logger.debug(
            "order_retrieved",
            order_id=order_id,
            **self._get_context_kwargs(),
        )

    def order_not_found(self, order_id: str) -> None:
        """Record that an order was not found."""
        self._logger.debug(
            "order_not_found",
            order_id=order_id,
            **self._get_context_kwargs(),
        )

    def duplicate_order_number(self, order_number: str) -> None:
        """Record that an order number was already taken."""
        self._logger.warning(
            "order_number_duplicate",
            order_number=order_number,
            **self._get_context_kwargs(),
        )
