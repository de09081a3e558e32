"""
Pytest configuration and shared fixtures.
"""

import logging

import pytest
import numpy as np


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging so tests don't leak them."""
    yield
    logger = logging.getLogger("lifegame")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)
