"""Tests for structlog setup."""

import logging

import pytest
import structlog

from notestore.logging import NOISY_LOGGERS, setup_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.mark.parametrize("debug", [True, False])
def test_configures_structlog(debug):
    """Test that setup_logging configures structlog in both modes."""
    setup_logging(debug)
    assert structlog.is_configured()


def test_silences_driver_loggers():
    """Test that pymongo loggers are raised to WARNING."""
    setup_logging(True)
    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING


def test_context_vars_merged_first():
    """Test that request context is merged before any other processor runs."""
    setup_logging(False)
    processors = structlog.get_config()["processors"]
    assert processors[0] is structlog.contextvars.merge_contextvars
    assert isinstance(processors[-1], structlog.processors.JSONRenderer)
