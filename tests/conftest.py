"""Shared pytest fixtures."""

import pytest

from minigit.logger import configure_logging


@pytest.fixture(autouse=True)
def quiet_logging():
    """Reset the minigit logger so CLI tests do not leak handlers."""
    yield
    configure_logging(level="WARNING", console_output=False)
