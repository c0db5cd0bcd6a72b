"""Unit tests for infrastructure settings."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from infrastructure.settings import (
    AuditSettings,
    CheckoutSettings,
    DatabaseSettings,
)


class TestDatabaseSettingsPoolConfiguration:
    """Tests for connection pool configuration."""

    def test_default_pool_settings(self):
        settings = DatabaseSettings()
        assert settings.pool_min_connections >= 1
        assert settings.pool_max_connections >= settings.pool_min_connections

    def test_pool_max_must_be_greater_than_or_equal_to_min(self):
        with pytest.raises(ValidationError) as exc_info:
            DatabaseSettings(pool_min_connections=10, pool_max_connections=5)

        assert "pool_max_connections" in str(exc_info.value)

    def test_pool_min_must_be_positive(self):
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_min_connections=0)

    def test_pool_max_respects_upper_limit(self):
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_max_connections=101)


class TestDatabaseSettingsTarget:
    def test_postgres_by_default(self):
        settings = DatabaseSettings(password="secret")

        assert not settings.is_sqlite
        assert "secret" not in settings.connection_string

    def test_sqlite_from_environment(self, monkeypatch, tmp_path):
        path = str(tmp_path / "store.db")
        monkeypatch.setenv("STOREFRONT_DB_SQLITE_PATH", path)

        settings = DatabaseSettings()

        assert settings.is_sqlite
        assert settings.connection_string == f"sqlite:///{path}"


class TestCheckoutSettings:
    def test_defaults(self):
        settings = CheckoutSettings()

        assert settings.order_number_prefix == "ORD-"
        assert settings.order_number_width == 5
        assert settings.max_order_number_attempts == 3
        assert settings.tax_rates["CA"] == Decimal("0.0725")

    def test_tax_rates_from_environment(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_CHECKOUT_TAX_RATES", '{"WA": "0.065"}')

        settings = CheckoutSettings()

        assert settings.tax_rates == {"WA": Decimal("0.065")}

    @pytest.mark.parametrize("attempts", [0, 11])
    def test_attempts_are_bounded(self, attempts):
        with pytest.raises(ValidationError):
            CheckoutSettings(max_order_number_attempts=attempts)

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            CheckoutSettings(transaction_timeout_seconds=0)


class TestAuditSettings:
    def test_enabled_by_default(self):
        assert AuditSettings().enabled is True

    def test_can_be_disabled_from_environment(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_AUDIT_ENABLED", "false")

        assert AuditSettings().enabled is False

    def test_queue_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            AuditSettings(queue_size=0)
