"""Observability for the checkout HTTP surface.

Failures that reach a route's catch-all are answered with a generic 500,
so this probe is the only place their cause and correlation id are kept.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class CheckoutApiProbe(Protocol):
    """Domain probe for checkout request failures."""

    def tenant_context_missing(self, operation: str) -> None:
        """Record that a handler ran with no bound tenant."""
        ...

    def request_failed(self, operation: str, error: str, correlation_id: str) -> None:
        """Record an unexpected failure answered with a generic 500."""
        ...

    def with_context(self, context: ObservationContext) -> CheckoutApiProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultCheckoutApiProbe:
    """Default implementation of CheckoutApiProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultCheckoutApiProbe:
        return DefaultCheckoutApiProbe(logger=self._logger, context=context)

    def tenant_context_missing(self, operation: str) -> None:
        self._logger.error(
            "checkout_tenant_context_missing",
            operation=operation,
            message="Checkout handler ran without a bound tenant; middleware wiring defect",
            **self._get_context_kwargs(),
        )

    def request_failed(self, operation: str, error: str, correlation_id: str) -> None:
        self._logger.error(
            "checkout_request_failed",
            operation=operation,
            error=error,
            correlation_id=correlation_id,
            **self._get_context_kwargs(),
        )
