"""Domain-Oriented Observability for ordering infrastructure."""

from ordering.infrastructure.observability.order_repository_probe import (
    DefaultOrderRepositoryProbe,
    OrderRepositoryProbe,
)

__all__ = [
    "DefaultOrderRepositoryProbe",
    "OrderRepositoryProbe",
]
