"""Pydantic models for audit log API responses."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from audit.domain.entry import AuditEntry
from audit.domain.listing import AuditLogPage


class AuditLogEntryResponse(BaseModel):
    """Response model for one audit entry."""

    id: str = Field(..., description="Entry ID (ULID format)")
    entity_type: str
    entity_id: str
    action: str
    actor_id: str | None
    changes: dict[str, Any] | None
    ip_address: str | None
    user_agent: str | None
    created_at: datetime

    @classmethod
    def from_domain(cls, entry: AuditEntry) -> AuditLogEntryResponse:
        return cls(
            id=entry.id,
            entity_type=entry.entity_type,
            entity_id=entry.entity_id,
            action=entry.action,
            actor_id=entry.actor_id,
            changes=dict(entry.changes) if entry.changes is not None else None,
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
            created_at=entry.created_at,
        )


class AuditLogPageResponse(BaseModel):
    """Response model for a page of audit entries."""

    entries: list[AuditLogEntryResponse]
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def from_domain(cls, page: AuditLogPage) -> AuditLogPageResponse:
        return cls(
            entries=[AuditLogEntryResponse.from_domain(entry) for entry in page.entries],
            total=page.total,
            page=page.page,
            limit=page.limit,
            total_pages=page.total_pages,
        )
