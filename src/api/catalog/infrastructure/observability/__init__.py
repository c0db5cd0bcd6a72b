"""Domain-Oriented Observability for catalog infrastructure."""

from catalog.infrastructure.observability.inventory_probe import (
    DefaultInventoryProbe,
    InventoryProbe,
)

__all__ = [
    "DefaultInventoryProbe",
    "InventoryProbe",
]
