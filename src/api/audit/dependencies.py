"""Dependency injection for the audit bounded context.

The dispatcher is an application-lifetime resource created in the FastAPI
lifespan and kept on ``app.state``; everything else is per request.
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from audit.application.observability import AuditTrailProbe, DefaultAuditTrailProbe
from audit.application.recorder import AuditTrailRecorder
from audit.infrastructure.audit_log_repository import AuditLogRepository
from audit.ports.sinks import AuditDispatcher
from infrastructure.database.dependencies import get_read_session
from infrastructure.settings import AuditSettings, get_audit_settings


def get_audit_trail_probe() -> AuditTrailProbe:
    """Get AuditTrailProbe instance."""
    return DefaultAuditTrailProbe()


def get_audit_dispatcher(request: Request) -> AuditDispatcher:
    """Get the dispatcher started by the application lifespan."""
    return request.app.state.audit_dispatcher


def get_audit_recorder(
    dispatcher: Annotated[AuditDispatcher, Depends(get_audit_dispatcher)],
    settings: Annotated[AuditSettings, Depends(get_audit_settings)],
    probe: Annotated[AuditTrailProbe, Depends(get_audit_trail_probe)],
) -> AuditTrailRecorder:
    """Get AuditTrailRecorder instance.

    Args:
        dispatcher: Application-wide audit dispatcher
        settings: Audit settings (enabled flag)
        probe: Audit trail probe for observability

    Returns:
        AuditTrailRecorder instance
    """
    return AuditTrailRecorder(dispatcher, probe=probe, enabled=settings.enabled)


def get_audit_log_repository(
    session: Annotated[AsyncSession, Depends(get_read_session)],
) -> AuditLogRepository:
    """Get AuditLogRepository bound to a read session."""
    return AuditLogRepository(session)
