"""
Logging test fixtures.
"""

import pytest


@pytest.fixture(autouse=True)
def _restore_logger(monkeypatch):
    """Put the apiref logger back the way the test found it."""
    from apiref._logging import logger

    monkeypatch.delenv("APIREF_LOG_FORMAT", raising=False)
    handlers = logger.handlers[:]
    level = logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
