"""Gate-backed implementation of ICatalogRepository."""

from __future__ import annotations

from decimal import Decimal

from catalog.domain.value_objects import ProductSnapshot, VariantSnapshot
from catalog.infrastructure.models import ProductModel, ProductVariantModel
from catalog.ports.repositories import ICatalogRepository
from infrastructure.database.tenant_gate import TenantScopedGate


class CatalogRepository(ICatalogRepository):
    """Reads products and variants for the bound tenant.

    Snapshots are returned for unpublished and soft-deleted rows too; the
    caller decides whether the item is purchasable.
    """

    def __init__(self, gate: TenantScopedGate) -> None:
        self._gate = gate

    async def get_product(self, product_id: str) -> ProductSnapshot | None:
        model = await self._gate.fetch_one(ProductModel, ProductModel.id == product_id)
        if model is None:
            return None

        return ProductSnapshot(
            id=model.id,
            name=model.name,
            sku=model.sku,
            price=Decimal(model.price),
            inventory_qty=model.inventory_qty,
            track_inventory=model.track_inventory,
            is_published=model.is_published,
            is_deleted=model.is_deleted,
            image=model.thumbnail_url,
        )

    async def get_variant(self, product_id: str, variant_id: str) -> VariantSnapshot | None:
        model = await self._gate.fetch_one(
            ProductVariantModel,
            ProductVariantModel.id == variant_id,
            ProductVariantModel.product_id == product_id,
        )
        if model is None:
            return None

        return VariantSnapshot(
            id=model.id,
            product_id=model.product_id,
            name=model.name,
            sku=model.sku,
            stock_quantity=model.stock_quantity,
            is_deleted=model.is_deleted,
            price=Decimal(model.price) if model.price is not None else None,
            track_inventory=model.track_inventory,
            image=model.image,
        )
