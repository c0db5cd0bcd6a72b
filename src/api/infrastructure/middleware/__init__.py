"""ASGI middleware shared across bounded contexts.

The tenant context middleware binds the tenant supplied by the upstream
session layer for the lifetime of each request.
"""

from infrastructure.middleware.tenant_context import TenantContextMiddleware

__all__ = ["TenantContextMiddleware"]
