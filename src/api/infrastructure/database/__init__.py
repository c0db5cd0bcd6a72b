"""Database infrastructure - engines, sessions and the tenant-scoped gate."""

from infrastructure.database.exceptions import (
    DatabaseError,
    UnscopedModelError,
)

__all__ = [
    "DatabaseError",
    "UnscopedModelError",
]
