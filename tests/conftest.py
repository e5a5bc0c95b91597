import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def _reset_loguru():
    """Drop sinks bound to streams captured by a previous test."""
    yield
    logger.remove()
