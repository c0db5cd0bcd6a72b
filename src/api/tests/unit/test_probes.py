"""Unit tests for domain probes.

Tests that domain probes correctly capture domain events
following the Domain Oriented Observability pattern.
"""

from unittest.mock import MagicMock

import structlog

from infrastructure.observability import ObservationContext
from infrastructure.observability.data_gate_probe import DefaultDataGateProbe
from infrastructure.observability.probes import DefaultConnectionProbe
from ordering.application.observability import DefaultOrderFulfillmentProbe


class TestConnectionProbe:
    """Tests for ConnectionProbe protocol and implementation."""

    def test_default_probe_creates_with_default_logger(self):
        """Default probe should work without explicit logger."""
        probe = DefaultConnectionProbe()
        assert probe._logger is not None

    def test_engine_created_logs_info(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultConnectionProbe(logger=mock_logger)

        probe.engine_created("postgresql://app@db:5432/store", 10)

        mock_logger.info.assert_called_once_with(
            "database_engine_created",
            connection_string="postgresql://app@db:5432/store",
            pool_size=10,
        )

    def test_sqlite_engine_created_warns(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultConnectionProbe(logger=mock_logger)

        probe.sqlite_engine_created("/tmp/store.db")

        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args[0][0] == "sqlite_engine_created"


class TestDataGateProbe:
    def test_missing_tenant_logs_error(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultDataGateProbe(logger=mock_logger)

        probe.tenant_context_missing(table="orders", operation="insert")

        call_kwargs = mock_logger.error.call_args[1]
        assert mock_logger.error.call_args[0][0] == "tenant_context_missing"
        assert call_kwargs["table"] == "orders"
        assert call_kwargs["operation"] == "insert"

    def test_bypass_denied_records_the_flag_it_was_given(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultDataGateProbe(logger=mock_logger)

        probe.bypass_denied("true")

        mock_logger.error.assert_called_once_with(
            "tenant_isolation_bypass_denied",
            elevated="'true'",
        )


class TestOrderFulfillmentProbe:
    def test_order_created_logs_info(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultOrderFulfillmentProbe(logger=mock_logger)

        probe.order_created(
            order_id="01ARZ3NDEKTSV4RRFFQ69G5FAV",
            order_number="ORD-00001",
            total_amount="65.97",
            line_item_count=1,
        )

        mock_logger.info.assert_called_once_with(
            "order_created",
            order_id="01ARZ3NDEKTSV4RRFFQ69G5FAV",
            order_number="ORD-00001",
            total_amount="65.97",
            line_item_count=1,
        )

    def test_timeouts_and_failures_log_errors_with_correlation_id(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultOrderFulfillmentProbe(logger=mock_logger)

        probe.transaction_timed_out(timeout_seconds=10.0, correlation_id="corr-1")
        probe.transaction_failed(error="disk I/O error", correlation_id="corr-2")

        events = [c[0][0] for c in mock_logger.error.call_args_list]
        correlation_ids = [c[1]["correlation_id"] for c in mock_logger.error.call_args_list]
        assert events == ["order_transaction_timed_out", "order_transaction_failed"]
        assert correlation_ids == ["corr-1", "corr-2"]


class TestObservationContext:
    """Tests for ObservationContext."""

    def test_as_dict_skips_unset_fields(self):
        context = ObservationContext(tenant_id="tenant-1", extra={"route": "/orders"})

        assert context.as_dict() == {"tenant_id": "tenant-1", "route": "/orders"}

    def test_with_correlation_keeps_other_fields(self):
        context = ObservationContext(request_id="req-1", actor_id="user-1")

        correlated = context.with_correlation("corr-1")

        assert correlated.as_dict() == {
            "request_id": "req-1",
            "actor_id": "user-1",
            "correlation_id": "corr-1",
        }
        assert context.correlation_id is None

    def test_probe_includes_context_in_logs(self):
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        context = ObservationContext(request_id="req-1", tenant_id="tenant-1")
        probe = DefaultOrderFulfillmentProbe(logger=mock_logger).with_context(context)

        probe.order_number_conflict(order_number="ORD-00007", attempt=1)

        call_kwargs = mock_logger.warning.call_args[1]
        assert call_kwargs["request_id"] == "req-1"
        assert call_kwargs["tenant_id"] == "tenant-1"
        assert call_kwargs["attempt"] == 1
