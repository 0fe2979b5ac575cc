"""py.test standard config file."""

import logging

import pytest

import tldparse.cache


@pytest.fixture(autouse=True)
def reset_log_level() -> None:
    """Automatically reset log level verbosity between tests.

    Generally want test output the Unix way: silence is golden.
    """
    tldparse.cache._DID_LOG_UNABLE_TO_CACHE = False
    logging.getLogger().setLevel(logging.WARN)
