"""Database-specific exceptions shared by all bounded contexts."""


class DatabaseError(Exception):
    """Base exception for database operations."""

    pass


class UnscopedModelError(DatabaseError):
    """Raised when a tenant-owned model has no tenant_id column to scope on."""

    def __init__(self, table_name: str):
        super().__init__(f"Tenant-owned table '{table_name}' has no tenant_id column")
        self.table_name = table_name
