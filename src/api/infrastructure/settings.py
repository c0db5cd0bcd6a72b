"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        STOREFRONT_DB_HOST: Database host (default: localhost)
        STOREFRONT_DB_PORT: Database port (default: 5432)
        STOREFRONT_DB_DATABASE: Database name (default: storefront)
        STOREFRONT_DB_USERNAME: Database user (default: storefront)
        STOREFRONT_DB_PASSWORD: Database password (required in production)
        STOREFRONT_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        STOREFRONT_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
        STOREFRONT_DB_SQLITE_PATH: Use a SQLite file instead of PostgreSQL
            (development and tests only)
    """

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="storefront", description="Database name")
    username: str = Field(default="storefront", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )
    sqlite_path: str | None = Field(
        default=None,
        description="Path of a SQLite database file (development/tests)",
    )
    busy_timeout_seconds: float = Field(
        default=30.0,
        description="How long a SQLite writer waits for the database lock",
        gt=0,
    )

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def is_sqlite(self) -> bool:
        """Whether the settings point at a SQLite file."""
        return self.sqlite_path is not None

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        if self.sqlite_path is not None:
            return f"sqlite:///{self.sqlite_path}"
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class CheckoutSettings(BaseSettings):
    """Order fulfillment settings.

    Environment variables:
        STOREFRONT_CHECKOUT_ORDER_NUMBER_PREFIX: Prefix of order numbers (default: ORD-)
        STOREFRONT_CHECKOUT_ORDER_NUMBER_WIDTH: Zero-padded digits (default: 5)
        STOREFRONT_CHECKOUT_MAX_ORDER_NUMBER_ATTEMPTS: Transaction attempts on
            order number collisions (default: 3)
        STOREFRONT_CHECKOUT_TRANSACTION_TIMEOUT_SECONDS: Upper bound for one
            order transaction (default: 10)
        STOREFRONT_CHECKOUT_TAX_RATES: JSON mapping of region code to rate
    """

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_CHECKOUT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    order_number_prefix: str = Field(default="ORD-", max_length=16)
    order_number_width: int = Field(default=5, ge=1, le=12)
    max_order_number_attempts: int = Field(default=3, ge=1, le=10)
    transaction_timeout_seconds: float = Field(default=10.0, gt=0, le=300)
    tax_rates: dict[str, Decimal] = Field(
        default_factory=lambda: {
            "CA": Decimal("0.0725"),
            "NY": Decimal("0.08"),
            "TX": Decimal("0.0625"),
            "FL": Decimal("0.06"),
        },
        description="Tax rate per shipping region",
    )


class AuditSettings(BaseSettings):
    """Audit trail settings.

    Environment variables:
        STOREFRONT_AUDIT_ENABLED: Record audit entries (default: true)
        STOREFRONT_AUDIT_QUEUE_SIZE: Pending entries before new ones are dropped
    """

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_AUDIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    enabled: bool = Field(default=True)
    queue_size: int = Field(default=1000, ge=1, le=100_000)


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Storefront Back Office API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    auto_create_schema: bool = Field(
        default=False,
        description="Create tables on startup instead of running migrations",
    )

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def checkout(self) -> CheckoutSettings:
        """Get checkout settings."""
        return get_checkout_settings()

    @property
    def audit(self) -> AuditSettings:
        """Get audit settings."""
        return get_audit_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()


@lru_cache
def get_checkout_settings() -> CheckoutSettings:
    """Get cached checkout settings."""
    return CheckoutSettings()


@lru_cache
def get_audit_settings() -> AuditSettings:
    """Get cached audit settings."""
    return AuditSettings()
