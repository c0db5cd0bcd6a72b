"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

import catalog.infrastructure.models  # noqa: F401
import ordering.infrastructure.models  # noqa: F401
from audit.application.observability import DefaultAuditTrailProbe
from audit.infrastructure.dispatcher import QueuedAuditDispatcher
from audit.infrastructure.models import AuditLogModel  # noqa: F401
from audit.infrastructure.sink import SqlAlchemyAuditSink
from audit.presentation import routes as audit_routes
from infrastructure.database.dependencies import (
    close_database_connections,
    get_write_engine,
    get_write_sessionmaker,
)
from infrastructure.database.models import Base
from infrastructure.logging import configure_logging
from infrastructure.middleware import TenantContextMiddleware
from infrastructure.settings import get_audit_settings, get_settings
from infrastructure.version import __version__
from ordering.presentation import routes as ordering_routes


async def create_schema() -> None:
    """Create every table that does not exist yet.

    Development convenience; production schemas are managed by alembic.
    """
    async with get_write_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@asynccontextmanager
async def audit_dispatcher_lifespan(app: FastAPI):
    """Run the audit dispatcher for the lifetime of the application."""
    settings = get_audit_settings()
    dispatcher = QueuedAuditDispatcher(
        sink=SqlAlchemyAuditSink(get_write_sessionmaker()),
        probe=DefaultAuditTrailProbe(),
        queue_size=settings.queue_size,
    )
    app.state.audit_dispatcher = dispatcher
    await dispatcher.start()
    try:
        yield
    finally:
        await dispatcher.stop()


@asynccontextmanager
async def storefront_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Optional schema creation
    - Audit dispatcher startup and drain on shutdown
    - Database engine disposal
    """
    settings = get_settings()
    configure_logging(settings)

    if settings.auto_create_schema:
        await create_schema()

    try:
        async with audit_dispatcher_lifespan(app):
            yield
    finally:
        await close_database_connections()


app = FastAPI(
    title="Storefront Back Office API",
    description="Multi-tenant catalog, checkout and audit core",
    version=__version__,
    lifespan=storefront_lifespan,
)

app.add_middleware(TenantContextMiddleware)

app.include_router(ordering_routes.router)
app.include_router(audit_routes.router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}
