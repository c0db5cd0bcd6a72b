"""Tenant context carrier shared by every bounded context."""

from shared_kernel.tenancy.context import (
    TenantContext,
    current_tenant,
    require_tenant,
    tenant_scope,
    with_tenant,
)
from shared_kernel.tenancy.exceptions import (
    TenantContextConflict,
    TenantContextError,
    TenantContextMissing,
    TenantIsolationBypassDenied,
)

__all__ = [
    "TenantContext",
    "TenantContextConflict",
    "TenantContextError",
    "TenantContextMissing",
    "TenantIsolationBypassDenied",
    "current_tenant",
    "require_tenant",
    "tenant_scope",
    "with_tenant",
]
