"""Protocol for cart validation observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class CartValidationProbe(Protocol):
    """Domain probe for cart validation."""

    def cart_line_rejected(
        self,
        product_id: str,
        variant_id: str | None,
        code: str,
    ) -> None:
        """Record that a cart line was rejected."""
        ...

    def cart_validated(
        self,
        accepted_lines: int,
        rejected_lines: int,
        subtotal: str,
        is_valid: bool,
    ) -> None:
        """Record the outcome of validating a whole cart."""
        ...

    def with_context(self, context: ObservationContext) -> CartValidationProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultCartValidationProbe:
    """Default implementation of CartValidationProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultCartValidationProbe:
        """Create a new probe with observation context bound."""
        return DefaultCartValidationProbe(logger=self._logger, context=context)

    def cart_line_rejected(
        self,
        product_id: str,
        variant_id: str | None,
        code: str,
    ) -> None:
        """Record that a cart line was rejected."""
        self._logger.debug(
            "cart_line_rejected",
            product_id=product_id,
            variant_id=variant_id,
            code=code,
            **self._get_context_kwargs(),
        )

    def cart_validated(
        self,
        accepted_lines: int,
        rejected_lines: int,
        subtotal: str,
        is_valid: bool,
    ) -> None:
        """Record the outcome of validating a whole cart."""
        self._logger.info(
            "cart_validated",
            accepted_lines=accepted_lines,
            rejected_lines=rejected_lines,
            subtotal=subtotal,
            is_valid=is_valid,
            **self._get_context_kwargs(),
        )
