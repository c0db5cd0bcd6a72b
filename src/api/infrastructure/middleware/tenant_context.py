"""Tenant context middleware.

Binds the tenant supplied by the upstream session layer for the lifetime of
each HTTP request. Identity is not re-verified here: the X-Tenant-ID and
X-Actor-ID headers are set by the authentication proxy in front of this
service.

This is a pure ASGI middleware rather than a ``BaseHTTPMiddleware`` so that
the downstream application runs in the same task, and therefore in the same
context, as the binding.
"""

from __future__ import annotations

from collections.abc import Iterable

from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send
from ulid import ULID

from infrastructure.observability.tenant_context_probe import (
    DefaultTenantContextProbe,
    TenantContextProbe,
)
from shared_kernel.tenancy import tenant_scope

TENANT_HEADER = "x-tenant-id"
ACTOR_HEADER = "x-actor-id"

DEFAULT_EXEMPT_PATHS = frozenset({"/health", "/docs", "/openapi.json", "/redoc"})


def _validate_ulid(raw_value: str) -> str:
    """Validate and parse a raw string as a ULID tenant identifier.

    Accepts case-insensitive input (Crockford's Base32) and
    returns the canonical uppercase form.

    Raises:
        ValueError: If the value is not a valid ULID.
    """
    return str(ULID.from_str(raw_value.strip().upper()))


class TenantContextMiddleware:
    """Bind the request's tenant before any route code runs."""

    def __init__(
        self,
        app: ASGIApp,
        exempt_paths: Iterable[str] = DEFAULT_EXEMPT_PATHS,
        probe: TenantContextProbe | None = None,
    ) -> None:
        self._app = app
        self._exempt_paths = frozenset(exempt_paths)
        self._probe = probe or DefaultTenantContextProbe()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["path"] in self._exempt_paths:
            await self._app(scope, receive, send)
            return

        path = scope["path"]
        headers = Headers(scope=scope)
        raw_tenant_id = headers.get(TENANT_HEADER)

        if raw_tenant_id is None:
            self._probe.tenant_header_missing(path=path)
            response = JSONResponse(
                {"detail": "X-Tenant-ID header is required"},
                status_code=400,
            )
            await response(scope, receive, send)
            return

        try:
            tenant_id = _validate_ulid(raw_tenant_id)
        except (ValueError, TypeError):
            self._probe.invalid_tenant_id_format(raw_value=raw_tenant_id, path=path)
            response = JSONResponse(
                {"detail": f"X-Tenant-ID must be a valid ULID format, got: '{raw_tenant_id}'"},
                status_code=400,
            )
            await response(scope, receive, send)
            return

        actor_id = headers.get(ACTOR_HEADER) or None

        with tenant_scope(tenant_id, source="header", actor_id=actor_id):
            self._probe.tenant_bound_from_header(
                tenant_id=tenant_id,
                actor_id=actor_id,
                path=path,
            )
            await self._app(scope, receive, send)
