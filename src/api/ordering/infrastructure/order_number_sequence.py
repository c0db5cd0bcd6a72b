"""Per-tenant order number sequence.

Numbers look like ``ORD-00001``. Values come from the tenant's row in
``order_number_counters``, incremented atomically by the gate, so two
concurrent checkouts can never draw the same value. The counter row is
part of the caller's transaction: a rolled-back checkout returns its
number.
"""

from __future__ import annotations

from infrastructure.database.tenant_gate import TenantScopedGate
from ordering.infrastructure.models import OrderNumberCounterModel
from ordering.ports.repositories import IOrderNumberSequence


class OrderNumberSequence(IOrderNumberSequence):
    """Counter-backed implementation of IOrderNumberSequence."""

    def __init__(
        self,
        gate: TenantScopedGate,
        prefix: str = "ORD-",
        width: int = 5,
    ) -> None:
        self._gate = gate
        self._prefix = prefix
        self._width = width

    def format(self, value: int) -> str:
        """Render a sequence value as an order number."""
        return f"{self._prefix}{value:0{self._width}d}"

    def parse(self, order_number: str) -> int | None:
        if not order_number.startswith(self._prefix):
            return None
        digits = order_number[len(self._prefix) :]
        if not digits.isdigit():
            return None
        return int(digits)

    async def next_order_number(self, minimum: int = 1) -> str:
        value = await self._gate.next_sequence_value(
            OrderNumberCounterModel,
            value_column="last_value",
            minimum=minimum,
        )
        return self.format(value)
