"""Shared pytest fixtures."""

import logging

import pytest


@pytest.fixture
def refsum_caplog(caplog):
    """caplog that also sees the refsum logger when it does not propagate."""
    logger = logging.getLogger("refsum")
    logger.addHandler(caplog.handler)
    try:
        with caplog.at_level(logging.ERROR, logger="refsum"):
            yield caplog
    finally:
        logger.removeHandler(caplog.handler)
