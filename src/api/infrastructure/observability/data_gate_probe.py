"""Domain probe for the tenant-scoped data gate.

The gate is a security boundary, so every refusal is logged at error level
and every cross-tenant read at warning level.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class DataGateProbe(Protocol):
    """Domain probe for tenant-scoped data access."""

    def tenant_context_missing(self, table: str, operation: str) -> None:
        """Record that a tenant-owned table was accessed with no bound tenant."""
        ...

    def bypass_denied(self, elevated: object) -> None:
        """Record that a cross-tenant read was requested without elevation."""
        ...

    def cross_tenant_read(self, table: str, operation: str) -> None:
        """Record that a tenant-owned table was read across tenants."""
        ...

    def with_context(self, context: ObservationContext) -> DataGateProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultDataGateProbe:
    """Default implementation of DataGateProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultDataGateProbe:
        """Create a new probe with observation context bound."""
        return DefaultDataGateProbe(logger=self._logger, context=context)

    def tenant_context_missing(self, table: str, operation: str) -> None:
        """Record that a tenant-owned table was accessed with no bound tenant."""
        self._logger.error(
            "tenant_context_missing",
            table=table,
            operation=operation,
            message="Tenant-owned table accessed without a bound tenant; request wiring defect",
            **self._get_context_kwargs(),
        )

    def bypass_denied(self, elevated: object) -> None:
        """Record that a cross-tenant read was requested without elevation."""
        self._logger.error(
            "tenant_isolation_bypass_denied",
            elevated=repr(elevated),
            **self._get_context_kwargs(),
        )

    def cross_tenant_read(self, table: str, operation: str) -> None:
        """Record that a tenant-owned table was read across tenants."""
        self._logger.warning(
            "cross_tenant_read",
            table=table,
            operation=operation,
            **self._get_context_kwargs(),
        )
