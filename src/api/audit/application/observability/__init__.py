"""Domain-Oriented Observability for the audit trail."""

from audit.application.observability.audit_trail_probe import (
    AuditTrailProbe,
    DefaultAuditTrailProbe,
)

__all__ = ["AuditTrailProbe", "DefaultAuditTrailProbe"]
