"""Read side of the audit trail."""

from __future__ import annotations

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from audit.domain.entry import AuditEntry
from audit.domain.listing import AuditLogFilter, AuditLogPage, PageRequest
from audit.infrastructure.models import AuditLogModel


class AuditLogRepository:
    """Lists audit entries of one tenant, newest first."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @staticmethod
    def _criteria(tenant_id: str, filters: AuditLogFilter) -> list[ColumnElement[bool]]:
        criteria: list[ColumnElement[bool]] = [AuditLogModel.tenant_id == tenant_id]
        if filters.entity_type:
            criteria.append(AuditLogModel.entity_type == filters.entity_type)
        if filters.entity_id:
            criteria.append(AuditLogModel.entity_id == filters.entity_id)
        if filters.actor_id:
            criteria.append(AuditLogModel.actor_id == filters.actor_id)
        if filters.action:
            criteria.append(AuditLogModel.action == filters.action.upper())
        if filters.start_date is not None:
            criteria.append(AuditLogModel.created_at >= filters.start_date)
        if filters.end_date is not None:
            criteria.append(AuditLogModel.created_at <= filters.end_date)
        return criteria

    async def list_entries(
        self,
        tenant_id: str,
        filters: AuditLogFilter,
        page: PageRequest,
    ) -> AuditLogPage:
        criteria = self._criteria(tenant_id, filters)

        total_result = await self._session.execute(
            select(func.count()).select_from(AuditLogModel).where(*criteria)
        )
        total = int(total_result.scalar_one())

        result = await self._session.execute(
            select(AuditLogModel)
            .where(*criteria)
            .order_by(AuditLogModel.created_at.desc(), AuditLogModel.id.desc())
            .offset(page.offset)
            .limit(page.limit)
        )
        entries = [
            AuditEntry(
                id=model.id,
                tenant_id=model.tenant_id,
                actor_id=model.actor_id,
                action=model.action,
                entity_type=model.entity_type,
                entity_id=model.entity_id,
                changes=model.changes,
                ip_address=model.ip_address,
                user_agent=model.user_agent,
                created_at=model.created_at,
            )
            for model in result.scalars().all()
        ]

        return AuditLogPage(entries=entries, total=total, page=page.page, limit=page.limit)
