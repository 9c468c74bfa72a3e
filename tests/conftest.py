"""
Pytest configuration and fixtures.
"""
import logging

import pytest

from exception_mapper import ExceptionHandler

HANDLER_LOGGER = "exception_mapper.handler"


@pytest.fixture
def handler():
    """Non-strict handler with an empty registry."""
    return ExceptionHandler(False)

@pytest.fixture
def strict_handler():
    """Strict handler with an empty registry."""
    return ExceptionHandler(True)

@pytest.fixture
def handler_logs(caplog):
    """Capture handler diagnostics down to DEBUG."""
    caplog.set_level(logging.DEBUG, logger=HANDLER_LOGGER)
    return caplog
