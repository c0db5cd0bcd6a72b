"""Tenant-scoped data gate.

Every repository that touches a tenant-owned table goes through a
``TenantScopedGate`` instead of the raw ``AsyncSession``. The gate reads the
bound tenant from the context carrier and:

- merges ``tenant_id = <bound tenant>`` into every read, update and delete
  filter, so a guessed primary key from another tenant matches nothing;
- stamps ``tenant_id`` on every inserted row, overwriting caller values;
- refuses to build any statement for a tenant-owned table while no tenant is
  bound (``TenantContextMissing``).

Tables outside ``TENANT_OWNED_TABLES`` pass through unmodified. Cross-tenant
reads need ``gate.bypass(elevated=True)`` and are logged.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, datetime
from typing import Any, TypeVar

from sqlalchemy import ColumnElement, Result, Select, case, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.exceptions import UnscopedModelError
from infrastructure.database.models import Base
from infrastructure.observability.data_gate_probe import DataGateProbe, DefaultDataGateProbe
from shared_kernel.tenancy import (
    TenantContextMissing,
    TenantIsolationBypassDenied,
    current_tenant,
)

ModelT = TypeVar("ModelT", bound=Base)

TENANT_OWNED_TABLES: frozenset[str] = frozenset(
    {
        "addresses",
        "brands",
        "categories",
        "customers",
        "inventory_logs",
        "order_line_items",
        "order_number_counters",
        "orders",
        "payments",
        "product_variants",
        "products",
        "reviews",
    }
)


def _table_name(model: type[Base]) -> str:
    return model.__table__.name


class TenantScopedGate:
    """Tenant-enforcing wrapper around an ``AsyncSession``.

    The gate never commits. The caller owns the transaction boundary, the
    same way repositories sharing a session do.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: DataGateProbe | None = None,
        tenant_owned_tables: Iterable[str] = TENANT_OWNED_TABLES,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultDataGateProbe()
        self._tenant_owned_tables = frozenset(tenant_owned_tables)

    def is_tenant_owned(self, model: type[Base]) -> bool:
        """Whether the model's table is on the tenant-owned allow-list."""
        return _table_name(model) in self._tenant_owned_tables

    def _resolve_tenant(self, model: type[Base], operation: str) -> str | None:
        """Return the tenant to scope on, or None for pass-through tables.

        Raises:
            TenantContextMissing: If the table is tenant-owned and no tenant is bound
            UnscopedModelError: If a tenant-owned model lacks a tenant_id column
        """
        if not self.is_tenant_owned(model):
            return None

        table = _table_name(model)
        context = current_tenant()
        if context is None:
            self._probe.tenant_context_missing(table=table, operation=operation)
            raise TenantContextMissing(f"{operation} {table}")

        if "tenant_id" not in model.__table__.c:
            raise UnscopedModelError(table)

        return context.tenant_id

    def _scoped_criteria(
        self,
        model: type[Base],
        criteria: Sequence[ColumnElement[bool]],
        operation: str,
    ) -> list[ColumnElement[bool]]:
        tenant_id = self._resolve_tenant(model, operation)
        if tenant_id is None:
            return list(criteria)
        return [model.__table__.c.tenant_id == tenant_id, *criteria]

    def select(self, model: type[ModelT], *criteria: ColumnElement[bool]) -> Select[tuple[ModelT]]:
        """Build a SELECT for ``model`` with the tenant predicate applied."""
        return select(model).where(*self._scoped_criteria(model, criteria, "select"))

    async def fetch_one(
        self,
        model: type[ModelT],
        *criteria: ColumnElement[bool],
        for_update: bool = False,
    ) -> ModelT | None:
        """Fetch the first row matching ``criteria`` within the bound tenant."""
        stmt = self.select(model, *criteria).limit(1)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        return result.scalars().first()

    async def fetch_all(
        self,
        model: type[ModelT],
        *criteria: ColumnElement[bool],
        order_by: Sequence[Any] = (),
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[ModelT]:
        """Fetch every row matching ``criteria`` within the bound tenant."""
        stmt = self.select(model, *criteria)
        if order_by:
            stmt = stmt.order_by(*order_by)
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def count(self, model: type[Base], *criteria: ColumnElement[bool]) -> int:
        """Count rows matching ``criteria`` within the bound tenant."""
        stmt = (
            select(func.count())
            .select_from(model)
            .where(*self._scoped_criteria(model, criteria, "count"))
        )
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    async def insert(self, instance: ModelT) -> ModelT:
        """Add ``instance`` stamped with the bound tenant and flush it.

        Flushing immediately surfaces constraint violations (for example a
        duplicate order number) at the call site instead of at commit.
        """
        tenant_id = self._resolve_tenant(type(instance), "insert")
        if tenant_id is not None:
            instance.tenant_id = tenant_id  # type: ignore[attr-defined]
        self._session.add(instance)
        await self._session.flush()
        return instance

    async def insert_all(self, instances: Sequence[ModelT]) -> list[ModelT]:
        """Add several rows stamped with the bound tenant and flush them."""
        for instance in instances:
            tenant_id = self._resolve_tenant(type(instance), "insert")
            if tenant_id is not None:
                instance.tenant_id = tenant_id  # type: ignore[attr-defined]
        self._session.add_all(instances)
        await self._session.flush()
        return list(instances)

    async def update(
        self,
        model: type[Base],
        *criteria: ColumnElement[bool],
        values: Mapping[str, Any],
        returning: Sequence[Any] = (),
    ) -> Result[Any]:
        """Run an UPDATE restricted to the bound tenant.

        Args:
            model: Target model
            *criteria: Additional WHERE criteria (combined with AND)
            values: Column values; may be SQL expressions
            returning: Columns to return for each updated row

        Returns:
            The statement result; with ``returning`` set, one row per updated row

        Raises:
            ValueError: If ``values`` tries to reassign tenant_id
        """
        if "tenant_id" in values and self.is_tenant_owned(model):
            raise ValueError("tenant_id cannot be reassigned through the gate")

        stmt = (
            update(model)
            .where(*self._scoped_criteria(model, criteria, "update"))
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if returning:
            stmt = stmt.returning(*returning)
        return await self._session.execute(stmt)

    async def delete(self, model: type[Base], *criteria: ColumnElement[bool]) -> int:
        """Hard-delete rows restricted to the bound tenant; returns the row count."""
        stmt = (
            delete(model)
            .where(*self._scoped_criteria(model, criteria, "delete"))
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount  # type: ignore[attr-defined]

    async def soft_delete(self, model: type[Base], *criteria: ColumnElement[bool]) -> int:
        """Set deleted_at on live rows restricted to the bound tenant."""
        deleted_at = model.__table__.c.deleted_at
        result = await self.update(
            model,
            deleted_at.is_(None),
            *criteria,
            values={"deleted_at": datetime.now(UTC)},
        )
        return result.rowcount  # type: ignore[attr-defined]

    async def next_sequence_value(
        self,
        counter_model: type[Base],
        value_column: str = "last_value",
        minimum: int = 1,
    ) -> int:
        """Atomically increment and return the bound tenant's counter.

        Implemented as a single INSERT .. ON CONFLICT DO UPDATE .. RETURNING,
        so the first call creates the row and concurrent callers serialize on
        the row lock; no read-then-write window exists.

        Args:
            counter_model: Tenant-owned model keyed by tenant_id
            value_column: Integer column holding the last issued value
            minimum: Lowest value to return; the counter jumps forward to it
        """
        tenant_id = self._resolve_tenant(counter_model, "next_sequence_value")
        if tenant_id is None:
            raise ValueError(f"{_table_name(counter_model)} is not a tenant-owned counter")

        dialect_name = self._session.get_bind().dialect.name
        if dialect_name == "postgresql":
            from sqlalchemy.dialects.postgresql import insert as dialect_insert
        elif dialect_name == "sqlite":
            from sqlalchemy.dialects.sqlite import insert as dialect_insert
        else:
            raise NotImplementedError(f"Atomic counters are not supported on {dialect_name}")

        column = counter_model.__table__.c[value_column]
        stmt = (
            dialect_insert(counter_model)
            .values({"tenant_id": tenant_id, value_column: max(minimum, 1)})
            .on_conflict_do_update(
                index_elements=["tenant_id"],
                set_={value_column: case((column + 1 < minimum, minimum), else_=column + 1)},
            )
            .returning(column)
        )
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    def bypass(self, *, elevated: bool) -> CrossTenantReader:
        """Return a reader that ignores tenant scoping.

        Only for platform administrators. The caller must pass the literal
        ``True`` it obtained from its own privilege check.

        Raises:
            TenantIsolationBypassDenied: If ``elevated`` is not ``True``
        """
        if elevated is not True:
            self._probe.bypass_denied(elevated)
            raise TenantIsolationBypassDenied(
                "Cross-tenant reads require an explicit elevated privilege flag"
            )
        return CrossTenantReader(self._session, self._probe)


class CrossTenantReader:
    """Read-only, unscoped access for platform administration."""

    def __init__(self, session: AsyncSession, probe: DataGateProbe) -> None:
        self._session = session
        self._probe = probe

    async def fetch_one(self, model: type[ModelT], *criteria: ColumnElement[bool]) -> ModelT | None:
        """Fetch the first row matching ``criteria`` in any tenant."""
        self._probe.cross_tenant_read(table=_table_name(model), operation="fetch_one")
        result = await self._session.execute(select(model).where(*criteria).limit(1))
        return result.scalars().first()

    async def fetch_all(
        self,
        model: type[ModelT],
        *criteria: ColumnElement[bool],
        order_by: Sequence[Any] = (),
        limit: int | None = None,
    ) -> list[ModelT]:
        """Fetch rows across all tenants."""
        self._probe.cross_tenant_read(table=_table_name(model), operation="fetch_all")
        stmt = select(model).where(*criteria)
        if order_by:
            stmt = stmt.order_by(*order_by)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def count(self, model: type[Base], *criteria: ColumnElement[bool]) -> int:
        """Count rows across all tenants."""
        self._probe.cross_tenant_read(table=_table_name(model), operation="count")
        stmt = select(func.count()).select_from(model).where(*criteria)
        result = await self._session.execute(stmt)
        return int(result.scalar_one())
