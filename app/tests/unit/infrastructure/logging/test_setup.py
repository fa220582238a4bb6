"""Unit tests for propsync.infrastructure.logging.setup."""

import logging

import pytest
import structlog

from propsync.infrastructure.logging.setup import (
    SILENT_LEVEL,
    build_processors,
    configure_logging,
    get_module_logger,
)


@pytest.mark.unit
class TestBuildProcessors:
    def test_production_renders_json(self):
        processors = build_processors(is_production=True)

        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        assert processors[0] is structlog.contextvars.merge_contextvars

    def test_development_renders_console(self):
        processors = build_processors(is_production=False)

        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_masks_before_truncating(self):
        processors = build_processors(is_production=True)
        event = {"event": "client_created", "private_token": "x" * 600}

        for processor in processors[4:7]:
            event = processor(None, "info", event)

        assert event["private_token"] == "***REDACTED***"
        assert event["app_name"] == "propsync"


@pytest.mark.unit
def test_configure_logging_is_silent_under_pytest():
    configure_logging(log_level="DEBUG", is_production=False)

    assert logging.root.level == SILENT_LEVEL


@pytest.mark.unit
def test_get_module_logger_binds_calling_module():
    logger = get_module_logger()

    context = structlog.get_context(logger)
    assert context["component"] == "test_setup"
    assert context["module_path"].endswith("test_setup")
