"""Pytest configuration and shared fixtures for lazy-result tests."""

import logging

import pytest
import structlog


@pytest.fixture
def sample_ok():
    """Sample Ok value for testing."""
    from lazy_result import Ok

    return Ok(42)


@pytest.fixture
def sample_err():
    """Sample Err value for testing."""
    from lazy_result import Err

    return Err('test error')


@pytest.fixture
def restore_logging():
    """Drop handlers installed by configure_logging and reset structlog afterwards."""
    root = logging.getLogger()
    level = root.level
    library = logging.getLogger('lazy_result')
    library_level = library.level
    yield
    library.setLevel(library_level)
    for handler in list(root.handlers):
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)
    root.setLevel(level)
    structlog.reset_defaults()
