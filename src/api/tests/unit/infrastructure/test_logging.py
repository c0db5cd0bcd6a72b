"""Unit tests for structlog configuration."""

import logging

import pytest
import structlog

from infrastructure.logging import build_processors, configure_logging
from infrastructure.settings import Settings
from shared_kernel.tenancy import tenant_scope


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


class TestConfigureLogging:
    def test_debug_setting_lowers_threshold(self):
        configure_logging(Settings(debug=True))

        wrapper = structlog.get_config()["wrapper_class"]
        assert wrapper is structlog.make_filtering_bound_logger(logging.DEBUG)

    def test_info_threshold_by_default(self):
        configure_logging(Settings(debug=False))

        wrapper = structlog.get_config()["wrapper_class"]
        assert wrapper is structlog.make_filtering_bound_logger(logging.INFO)


class TestProcessors:
    def test_json_output_without_colors(self):
        processors = build_processors(use_colors=False)

        assert processors[0] is structlog.contextvars.merge_contextvars
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_output_with_colors(self):
        processors = build_processors(use_colors=True)

        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_bound_tenant_is_merged_into_events(self):
        merge = build_processors(use_colors=False)[0]

        with tenant_scope("01ARZ3NDEKTSV4RRFFQ69G5FAV"):
            event = merge(None, "info", {"event": "order_created"})

        assert event["tenant_id"] == "01ARZ3NDEKTSV4RRFFQ69G5FAV"
        assert "tenant_id" not in merge(None, "info", {"event": "after_scope"})
