"""Audit entry value object."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from ulid import ULID


class AuditAction(StrEnum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


_METHOD_ACTIONS: dict[str, str] = {
    "POST": AuditAction.CREATE.value,
    "PUT": AuditAction.UPDATE.value,
    "PATCH": AuditAction.UPDATE.value,
    "DELETE": AuditAction.DELETE.value,
}


def action_for_method(method: str) -> str:
    """Map an HTTP-style verb to an audit action.

    POST maps to CREATE, PUT and PATCH to UPDATE, DELETE to DELETE. Any
    other verb is recorded upper-cased, so ``"create"`` becomes ``CREATE``.
    """
    verb = method.strip().upper()
    return _METHOD_ACTIONS.get(verb, verb)


@dataclass(frozen=True)
class AuditEntry:
    """One append-only audit record.

    Attributes:
        entity_type: Kind of entity acted upon, e.g. ``Order``
        entity_id: Identifier of the entity
        action: CREATE, UPDATE, DELETE or an upper-cased custom verb
        tenant_id: Owning tenant; None for platform-level events
        actor_id: User who performed the action, if known
        changes: JSON-serializable description of the change
        ip_address: Caller IP forwarded by the request layer
        user_agent: Caller user agent forwarded by the request layer
    """

    entity_type: str
    entity_id: str
    action: str
    tenant_id: str | None = None
    actor_id: str | None = None
    changes: Mapping[str, Any] | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    id: str = field(default_factory=lambda: str(ULID()))
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def create(
        cls,
        entity_type: str,
        entity_id: str,
        action: str | None = None,
        method: str | None = None,
        **fields: Any,
    ) -> AuditEntry:
        """Build an entry, deriving ``action`` from ``method`` when not given.

        Raises:
            ValueError: If neither action nor method is provided
        """
        if action is None:
            if method is None:
                raise ValueError("Either action or method is required")
            action = action_for_method(method)
        return cls(
            entity_type=entity_type,
            entity_id=entity_id,
            action=action.upper(),
            **fields,
        )
