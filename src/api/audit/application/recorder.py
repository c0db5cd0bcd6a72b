"""Audit trail recorder.

``AuditTrailRecorder.record`` is safe to call from any code path, including
right after a critical commit: it never raises and never awaits I/O. The
entry is handed to a dispatcher that persists it in the background.
"""

from __future__ import annotations

from typing import Any

from audit.application.observability import AuditTrailProbe, DefaultAuditTrailProbe
from audit.domain.entry import AuditEntry
from audit.ports.sinks import AuditDispatcher


class AuditTrailRecorder:
    """Best-effort, non-blocking audit recorder."""

    def __init__(
        self,
        dispatcher: AuditDispatcher,
        probe: AuditTrailProbe | None = None,
        enabled: bool = True,
    ) -> None:
        self._dispatcher = dispatcher
        self._probe = probe or DefaultAuditTrailProbe()
        self._enabled = enabled

    def record(self, entry: AuditEntry | None = None, /, **fields: Any) -> AuditEntry | None:
        """Append an audit entry.

        Either pass a ready ``AuditEntry`` or the keyword fields accepted by
        ``AuditEntry.create`` (``entity_type``, ``entity_id`` and ``action``
        or ``method``, plus optional details).

        Returns:
            The submitted entry, or None if it was dropped or could not be built
        """
        if not self._enabled:
            return None

        try:
            if entry is None:
                entry = AuditEntry.create(**fields)
            if not self._dispatcher.submit(entry):
                return None
        except Exception as e:
            entity_type = entry.entity_type if entry is not None else fields.get("entity_type")
            self._probe.recording_failed(entity_type=str(entity_type), error=str(e))
            return None

        self._probe.entry_recorded(
            entry_id=entry.id,
            entity_type=entry.entity_type,
            action=entry.action,
        )
        return entry
