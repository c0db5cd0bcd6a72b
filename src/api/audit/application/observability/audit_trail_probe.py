"""Domain probe for the audit trail.

Audit failures are never propagated to callers, so this probe is the only
place they become visible. Drops and delivery failures log at error level.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AuditTrailProbe(Protocol):
    """Domain probe for audit recording and delivery."""

    def entry_recorded(self, entry_id: str, entity_type: str, action: str) -> None:
        """Record that an entry was accepted for delivery."""
        ...

    def entry_dropped(self, entry_id: str, reason: str) -> None:
        """Record that an entry was dropped before delivery."""
        ...

    def recording_failed(self, entity_type: str, error: str) -> None:
        """Record that building or submitting an entry raised."""
        ...

    def entry_delivered(self, entry_id: str) -> None:
        """Record that an entry reached the sink."""
        ...

    def delivery_failed(self, entry_id: str, error: str) -> None:
        """Record that the sink raised for an entry."""
        ...

    def dispatcher_started(self, queue_size: int) -> None:
        """Record that the background dispatcher started."""
        ...

    def dispatcher_stopped(self, pending: int) -> None:
        """Record that the background dispatcher stopped."""
        ...

    def with_context(self, context: ObservationContext) -> AuditTrailProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAuditTrailProbe:
    """Default implementation of AuditTrailProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAuditTrailProbe:
        """Create a new probe with observation context bound."""
        return DefaultAuditTrailProbe(logger=self._logger, context=context)

    def entry_recorded(self, entry_id: str, entity_type: str, action: str) -> None:
        """Record that an entry was accepted for delivery."""
        self._logger.debug(
            "audit_entry_recorded",
            entry_id=entry_id,
            entity_type=entity_type,
            action=action,
            **self._get_context_kwargs(),
        )

    def entry_dropped(self, entry_id: str, reason: str) -> None:
        """Record that an entry was dropped before delivery."""
        self._logger.error(
            "audit_entry_dropped",
            entry_id=entry_id,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def recording_failed(self, entity_type: str, error: str) -> None:
        """Record that building or submitting an entry raised."""
        self._logger.error(
            "audit_recording_failed",
            entity_type=entity_type,
            error=error,
            **self._get_context_kwargs(),
        )

    def entry_delivered(self, entry_id: str) -> None:
        """Record that an entry reached the sink."""
        self._logger.debug(
            "audit_entry_delivered",
            entry_id=entry_id,
            **self._get_context_kwargs(),
        )

    def delivery_failed(self, entry_id: str, error: str) -> None:
        """Record that the sink raised for an entry."""
        self._logger.error(
            "audit_delivery_failed",
            entry_id=entry_id,
            error=error,
            **self._get_context_kwargs(),
        )

    def dispatcher_started(self, queue_size: int) -> None:
        """Record that the background dispatcher started."""
        self._logger.info(
            "audit_dispatcher_started",
            queue_size=queue_size,
            **self._get_context_kwargs(),
        )

    def dispatcher_stopped(self, pending: int) -> None:
        """Record that the background dispatcher stopped."""
        self._logger.info(
            "audit_dispatcher_stopped",
            pending=pending,
            **self._get_context_kwargs(),
        )
