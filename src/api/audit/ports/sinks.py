"""Audit delivery ports.

Recording is split in two hops so persistence can never block or fail the
caller: the recorder submits entries to an ``AuditDispatcher`` (non-blocking)
and the dispatcher delivers them to an ``AuditSink`` (may do I/O).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from audit.domain.entry import AuditEntry


@runtime_checkable
class AuditSink(Protocol):
    """Final destination of audit entries."""

    async def write(self, entry: AuditEntry) -> None:
        """Persist one entry. May raise; callers isolate failures."""
        ...


@runtime_checkable
class AuditDispatcher(Protocol):
    """Non-blocking hand-off of audit entries."""

    def submit(self, entry: AuditEntry) -> bool:
        """Queue an entry for delivery.

        Returns:
            False when the entry was dropped
        """
        ...
