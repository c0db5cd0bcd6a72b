"""HTTP routes for browsing the audit trail."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from audit.dependencies import get_audit_log_repository
from audit.domain.listing import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    AuditLogFilter,
    PageRequest,
)
from audit.infrastructure.audit_log_repository import AuditLogRepository
from audit.presentation.models import AuditLogPageResponse
from shared_kernel.tenancy import require_tenant

router = APIRouter(
    prefix="/audit-logs",
    tags=["audit"],
)


@router.get("")
async def list_audit_logs(
    repository: Annotated[AuditLogRepository, Depends(get_audit_log_repository)],
    entity_type: str | None = None,
    entity_id: str | None = None,
    actor_id: str | None = None,
    action: str | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = DEFAULT_PAGE_SIZE,
) -> AuditLogPageResponse:
    """List audit entries of the current tenant, newest first.

    Raises:
        HTTPException: 500 for unexpected errors
    """
    try:
        tenant = require_tenant("list_audit_logs")
        result = await repository.list_entries(
            tenant.tenant_id,
            AuditLogFilter(
                entity_type=entity_type,
                entity_id=entity_id,
                actor_id=actor_id,
                action=action,
                start_date=start_date,
                end_date=end_date,
            ),
            PageRequest(page=page, limit=limit),
        )
        return AuditLogPageResponse.from_domain(result)

    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list audit logs",
        )
