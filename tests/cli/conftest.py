"""Fixtures for CLI tests."""

import sys

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def reset_logger():
    """Restore the default sink after each command swaps stderr."""
    yield
    logger.remove()
    logger.add(sys.stderr)
