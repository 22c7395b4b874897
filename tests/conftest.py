"""
Shared pytest fixtures for the ZelUnit test suite.
"""

import logging

import pytest

from zelunit_core.logging_config import LIBRARY_LOGGERS, HumanFormatter, JSONFormatter
from zelunit_core.unit import Unit


@pytest.fixture
def one_point_two():
    """1.2 ZEL."""
    return Unit(1.2, "ZEL")


@pytest.fixture
def one_point_three():
    """1.3 ZEL, the amount most conversion tests start from."""
    return Unit(1.3, "ZEL")


@pytest.fixture
def restore_root_logger():
    """Drop the handlers setup_logging() installed and reset the root level."""
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in list(root.handlers):
        if isinstance(handler.formatter, (HumanFormatter, JSONFormatter)):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET)
