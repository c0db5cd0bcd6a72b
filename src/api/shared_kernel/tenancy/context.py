"""Request-scoped tenant context carrier.

The active tenant lives in a ``ContextVar``. asyncio copies the current
context into every task it creates, so a binding made at the start of a
request follows the request through awaits and spawned tasks, while
concurrently running requests each see only their own binding.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Literal

import structlog

from shared_kernel.tenancy.exceptions import TenantContextConflict, TenantContextMissing

TenantSource = Literal["header", "explicit"]


@dataclass(frozen=True)
class TenantContext:
    """Resolved tenant context for the current request.

    Attributes:
        tenant_id: The tenant identifier supplied by the session layer.
        source: How the tenant was bound - 'header' when resolved from the
            trusted upstream headers, 'explicit' when bound by a service call.
        actor_id: The authenticated user acting within the tenant, if known.
    """

    tenant_id: str
    source: TenantSource = "explicit"
    actor_id: str | None = None


_current_tenant: ContextVar[TenantContext | None] = ContextVar(
    "storefront_tenant_context",
    default=None,
)


def current_tenant() -> TenantContext | None:
    """Return the tenant bound to the current scope, or None when absent."""
    return _current_tenant.get()


def require_tenant(operation: str | None = None) -> TenantContext:
    """Return the bound tenant or fail closed.

    Args:
        operation: Name of the operation, included in the error message

    Raises:
        TenantContextMissing: If no tenant is bound
    """
    context = _current_tenant.get()
    if context is None:
        raise TenantContextMissing(operation)
    return context


@contextmanager
def tenant_scope(
    tenant_id: str,
    *,
    source: TenantSource = "explicit",
    actor_id: str | None = None,
) -> Iterator[TenantContext]:
    """Bind a tenant for the duration of the block.

    The previous binding is restored on every exit path. Entering a scope
    for the tenant that is already bound is a no-op, so a service may bind
    the same tenant the request middleware already bound.

    Args:
        tenant_id: Tenant to bind
        source: How the tenant was resolved
        actor_id: Acting user, if known

    Yields:
        The active TenantContext

    Raises:
        ValueError: If tenant_id is empty
        TenantContextConflict: If a different tenant is already bound
    """
    if not tenant_id or not tenant_id.strip():
        raise ValueError("tenant_id must not be empty")

    bound = _current_tenant.get()
    if bound is not None and bound.tenant_id != tenant_id:
        raise TenantContextConflict(bound.tenant_id, tenant_id)

    context = bound or TenantContext(tenant_id=tenant_id, source=source, actor_id=actor_id)
    token = _current_tenant.set(context)
    try:
        with structlog.contextvars.bound_contextvars(tenant_id=tenant_id):
            yield context
    finally:
        _current_tenant.reset(token)


async def with_tenant(
    tenant_id: str,
    fn: Callable[..., Any],
    *args: Any,
    **kwargs: Any,
) -> Any:
    """Run ``fn`` with ``tenant_id`` bound and return its result.

    ``fn`` may be a plain function or a coroutine function; coroutines are
    awaited inside the scope so the binding covers their whole execution.
    """
    with tenant_scope(tenant_id):
        result = fn(*args, **kwargs)
        if inspect.isawaitable(result):
            result = await result
        return result
