"""Tenant isolation exceptions.

These represent defects in request wiring or privilege handling, never user
errors. They should be logged loudly and never shown to end users.
"""


class TenantContextError(Exception):
    """Base exception for tenant context violations."""

    pass


class TenantContextMissing(TenantContextError):
    """Raised when a tenant-scoped operation runs with no bound tenant.

    The tenant-scoped gate raises this before any statement reaches the
    database, so an unbound request can never query across tenants.
    """

    def __init__(self, operation: str | None = None):
        message = "No tenant bound to the current request scope"
        if operation:
            message = f"{message} (operation: {operation})"
        super().__init__(message)
        self.operation = operation


class TenantContextConflict(TenantContextError):
    """Raised when a scope tries to rebind a different tenant.

    A request belongs to exactly one tenant; nesting a second tenant inside
    an active scope indicates cross-tenant code paths.
    """

    def __init__(self, bound_tenant_id: str, requested_tenant_id: str):
        super().__init__(
            f"Tenant {requested_tenant_id} requested while {bound_tenant_id} is bound"
        )
        self.bound_tenant_id = bound_tenant_id
        self.requested_tenant_id = requested_tenant_id


class TenantIsolationBypassDenied(TenantContextError):
    """Raised when a cross-tenant read is requested without explicit elevation."""

    pass
