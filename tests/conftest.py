import logging
import os
from datetime import datetime

import pytest

ENV_KEYS = [
    "DLOG_DIR",
    "DLOG_FILE_FORMAT",
    "DLOG_LINE_FORMAT",
    "DLOG_RETENTION_DAYS",
    "DLOG_DEBUG",
    "DLOG_VERBOSE",
    "DLOG_QUIET",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env_and_state():
    """
    Ensure tests don't leak env, cached config, bootstrap state or handlers.
    """
    saved = {k: os.environ.pop(k) for k in ENV_KEYS if k in os.environ}

    import dated_logger.bootstrap
    from dated_logger.env import reset_env_caches

    dated_logger.bootstrap._BOOTSTRAPPED = False
    reset_env_caches()

    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level

    yield

    # main() and bootstrap write straight to os.environ.
    for k in ENV_KEYS:
        os.environ.pop(k, None)
    os.environ.update(saved)

    dated_logger.bootstrap._BOOTSTRAPPED = False
    reset_env_caches()

    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
    root.setLevel(level)


@pytest.fixture
def fixed_clock():
    return lambda: datetime(2024, 1, 1, 10, 0, 0)


@pytest.fixture
def log_dir(tmp_path):
    return tmp_path / "logs"
