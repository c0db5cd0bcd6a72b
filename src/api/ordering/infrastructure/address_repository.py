"""Gate-backed implementation of IAddressRepository."""

from __future__ import annotations

from ulid import ULID

from infrastructure.database.tenant_gate import TenantScopedGate
from ordering.domain.value_objects import AddressType, PostalAddress
from ordering.infrastructure.models import AddressModel
from ordering.ports.repositories import IAddressRepository


class AddressRepository(IAddressRepository):
    """Writes checkout address snapshots for the bound tenant."""

    def __init__(self, gate: TenantScopedGate) -> None:
        self._gate = gate

    async def add(self, address: PostalAddress, address_type: AddressType) -> str:
        model = AddressModel(
            id=str(ULID()),
            type=address_type.value,
            name=address.name,
            line1=address.line1,
            line2=address.line2,
            city=address.city,
            region=address.region,
            postal_code=address.postal_code,
            country=address.country.upper(),
            phone=address.phone,
        )
        await self._gate.insert(model)
        return model.id
