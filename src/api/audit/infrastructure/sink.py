"""Database-backed audit sink."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from audit.domain.entry import AuditEntry
from audit.infrastructure.models import AuditLogModel
from audit.ports.sinks import AuditSink


def _jsonable(changes: Mapping[str, Any] | None) -> dict[str, Any] | None:
    """Coerce a changes mapping into plain JSON types (Decimal, datetime become strings)."""
    if changes is None:
        return None
    return json.loads(json.dumps(dict(changes), default=str))


class SqlAlchemyAuditSink(AuditSink):
    """Writes each entry in its own session and transaction.

    A failing audit write therefore never touches the transaction of the
    operation being audited.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def write(self, entry: AuditEntry) -> None:
        async with self._session_factory() as session, session.begin():
            session.add(
                AuditLogModel(
                    id=entry.id,
                    tenant_id=entry.tenant_id,
                    actor_id=entry.actor_id,
                    action=entry.action,
                    entity_type=entry.entity_type,
                    entity_id=entry.entity_id,
                    changes=_jsonable(entry.changes),
                    ip_address=entry.ip_address,
                    user_agent=entry.user_agent,
                    created_at=entry.created_at,
                )
            )
