"""Domain probe for inventory mutations.

Following Domain-Oriented Observability patterns, this probe captures
stock decrements, rejected decrements and low-stock transitions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class InventoryProbe(Protocol):
    """Domain probe for inventory repository operations."""

    def stock_decremented(
        self,
        product_id: str,
        variant_id: str | None,
        previous_qty: int,
        new_qty: int,
    ) -> None:
        """Record that stock was decremented."""
        ...

    def stock_decrement_rejected(
        self,
        product_id: str,
        variant_id: str | None,
        requested: int,
    ) -> None:
        """Record that a decrement was refused for lack of stock."""
        ...

    def low_stock_reached(
        self,
        product_id: str,
        variant_id: str | None,
        quantity: int,
        status: str,
    ) -> None:
        """Record that an item dropped to low stock or out of stock."""
        ...

    def with_context(self, context: ObservationContext) -> InventoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultInventoryProbe:
    """Default implementation of InventoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultInventoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultInventoryProbe(logger=self._logger, context=context)

    def stock_decremented(
        self,
        product_id: str,
        variant_id: str | None,
        previous_qty: int,
        new_qty: int,
    ) -> None:
        """Record that stock was decremented."""
        self._logger.debug(
            "inventory_stock_decremented",
            product_id=product_id,
            variant_id=variant_id,
            previous_qty=previous_qty,
            new_qty=new_qty,
            **self._get_context_kwargs(),
        )

    def stock_decrement_rejected(
        self,
        product_id: str,
        variant_id: str | None,
        requested: int,
    ) -> None:
        """Record that a decrement was refused for lack of stock."""
        self._logger.info(
            "inventory_stock_decrement_rejected",
            product_id=product_id,
            variant_id=variant_id,
            requested=requested,
            **self._get_context_kwargs(),
        )

    def low_stock_reached(
        self,
        product_id: str,
        variant_id: str | None,
        quantity: int,
        status: str,
    ) -> None:
        """Record that an item dropped to low stock or out of stock."""
        self._logger.info(
            "inventory_low_stock_reached",
            product_id=product_id,
            variant_id=variant_id,
            quantity=quantity,
            status=status,
            **self._get_context_kwargs(),
        )
