"""Unit tests for the tenant context carrier."""

import asyncio

import pytest
import structlog
from ulid import ULID

from shared_kernel.tenancy import (
    TenantContextConflict,
    TenantContextMissing,
    current_tenant,
    require_tenant,
    tenant_scope,
    with_tenant,
)


class TestTenantScope:
    """Tests for binding and restoring the tenant."""

    def test_no_tenant_bound_by_default(self):
        assert current_tenant() is None

    def test_binds_tenant_inside_block(self, tenant_id):
        with tenant_scope(tenant_id, actor_id="user-1") as context:
            assert context.tenant_id == tenant_id
            assert context.actor_id == "user-1"
            assert current_tenant() == context

    def test_restores_previous_binding_on_exit(self, tenant_id):
        with tenant_scope(tenant_id):
            pass

        assert current_tenant() is None

    def test_restores_previous_binding_on_exception(self, tenant_id):
        with pytest.raises(RuntimeError):
            with tenant_scope(tenant_id):
                raise RuntimeError("boom")

        assert current_tenant() is None

    def test_rejects_empty_tenant_id(self):
        with pytest.raises(ValueError):
            with tenant_scope(""):
                pass

    def test_rejects_blank_tenant_id(self):
        with pytest.raises(ValueError):
            with tenant_scope("   "):
                pass

    def test_reentering_same_tenant_keeps_outer_context(self, tenant_id):
        with tenant_scope(tenant_id, source="header", actor_id="user-1") as outer:
            with tenant_scope(tenant_id) as inner:
                assert inner is outer
                assert inner.source == "header"
            assert current_tenant() is outer

    def test_binding_a_different_tenant_conflicts(self, tenant_id, other_tenant_id):
        with tenant_scope(tenant_id):
            with pytest.raises(TenantContextConflict) as exc_info:
                with tenant_scope(other_tenant_id):
                    pass

            assert exc_info.value.bound_tenant_id == tenant_id
            assert exc_info.value.requested_tenant_id == other_tenant_id
            assert current_tenant().tenant_id == tenant_id

    def test_binds_tenant_into_log_context(self, tenant_id):
        with tenant_scope(tenant_id):
            assert structlog.contextvars.get_contextvars()["tenant_id"] == tenant_id

        assert "tenant_id" not in structlog.contextvars.get_contextvars()


class TestRequireTenant:
    """Tests for fail-closed tenant lookup."""

    def test_raises_when_unbound(self):
        with pytest.raises(TenantContextMissing) as exc_info:
            require_tenant("list_orders")

        assert exc_info.value.operation == "list_orders"
        assert "list_orders" in str(exc_info.value)

    def test_returns_bound_context(self, tenant_id):
        with tenant_scope(tenant_id):
            assert require_tenant().tenant_id == tenant_id


class TestWithTenant:
    """Tests for running callables inside a tenant scope."""

    @pytest.mark.asyncio
    async def test_runs_sync_function_in_scope(self, tenant_id):
        result = await with_tenant(tenant_id, lambda: require_tenant().tenant_id)

        assert result == tenant_id
        assert current_tenant() is None

    @pytest.mark.asyncio
    async def test_awaits_coroutine_function_in_scope(self, tenant_id):
        async def read_tenant(suffix: str) -> str:
            await asyncio.sleep(0)
            return require_tenant().tenant_id + suffix

        result = await with_tenant(tenant_id, read_tenant, "-x")

        assert result == f"{tenant_id}-x"

    @pytest.mark.asyncio
    async def test_concurrent_scopes_do_not_leak(self):
        """Interleaved tasks each observe only their own tenant."""
        tenants = [str(ULID()) for _ in range(20)]

        async def observe(expected: str) -> list[str]:
            seen = []
            for _ in range(5):
                await asyncio.sleep(0)
                seen.append(require_tenant().tenant_id)
            return seen

        results = await asyncio.gather(
            *(with_tenant(tenant, observe, tenant) for tenant in tenants)
        )

        for tenant, seen in zip(tenants, results):
            assert seen == [tenant] * 5

    @pytest.mark.asyncio
    async def test_spawned_tasks_inherit_binding(self, tenant_id):
        async def child() -> str:
            return require_tenant().tenant_id

        async def parent() -> str:
            return await asyncio.create_task(child())

        assert await with_tenant(tenant_id, parent) == tenant_id
