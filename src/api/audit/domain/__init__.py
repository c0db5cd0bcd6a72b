from audit.domain.entry import AuditAction, AuditEntry, action_for_method
from audit.domain.listing import AuditLogFilter, AuditLogPage, PageRequest

__all__ = [
    "AuditAction",
    "AuditEntry",
    "AuditLogFilter",
    "AuditLogPage",
    "PageRequest",
    "action_for_method",
]
