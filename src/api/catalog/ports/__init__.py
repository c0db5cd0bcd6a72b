"""Ports (interfaces) for the catalog bounded context."""

from catalog.ports.repositories import ICatalogRepository, IInventoryRepository

__all__ = [
    "ICatalogRepository",
    "IInventoryRepository",
]
