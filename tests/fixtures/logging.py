"""
Logging fixtures for testing.

Provides fixtures for mock loggers and log capturing.
"""

import logging
from collections.abc import Generator
from io import StringIO
from unittest.mock import Mock

import pytest

from sigmon.log import create_lg


@pytest.fixture(autouse=True)
def reset_logging_state() -> Generator[None, None, None]:
    """
    Reset Python logging global state before and after each test.

    This prevents test pollution from loggers created by previous tests.
    """
    original_handlers = logging.root.handlers[:]
    original_level = logging.root.level

    yield

    for name in list(logging.root.manager.loggerDict.keys()):
        if name.startswith("sigmon") or name.startswith("test"):
            del logging.root.manager.loggerDict[name]

    logging.root.handlers = original_handlers
    logging.root.setLevel(original_level)


@pytest.fixture
def mock_logger() -> Mock:
    """Create mock logger for tests."""
    return Mock(spec=logging.Logger)


@pytest.fixture
def capture_logs() -> Generator[StringIO, None, None]:
    """
    Capture output of a "test.sigmon" logger at trace level.

    Yields:
        StringIO: Stream capturing log output
    """
    stream = StringIO()
    create_lg("test.sigmon", "trace", stream=stream)
    yield stream


@pytest.fixture
def test_lg(capture_logs: StringIO) -> logging.Logger:
    """Logger writing into capture_logs."""
    return logging.getLogger("test.sigmon")
