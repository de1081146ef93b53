# SPDX-License-Identifier: GPL-3.0-or-later
import logging
import os
import sys
from typing import Any, Generator

import pytest

CLEAR_ENV_VARS = [
    "GCLOUD_CREDENTIALS",
    "GCLOUD_PROJECT",
    "GCLOUD_OPERATION_POLL_INTERVAL",
    "GCLOUD_OPERATION_TIMEOUT",
]


@pytest.fixture(scope="session", autouse=True)
def tests_setup_and_teardown() -> Generator[Any, Any, Any]:
    """
    Update the environment variables for testing.

    Before tests run:
    - Copy env to `old_environ`
    - Remove the Google Cloud settings inherited from the user

    After tests run:
    - Clean env
    - Update env with `old_environ` (restore env)
    """
    old_environ = dict(os.environ)
    for key in CLEAR_ENV_VARS:
        os.environ.pop(key, None)

    yield

    os.environ.clear()
    os.environ.update(old_environ)


@pytest.fixture(autouse=True)
def save_argv():
    """
    Save and restore sys.argv around each test.

    This is an autouse fixture, so tests can freely modify
    sys.argv without concern.
    """
    orig_argv = sys.argv[:]
    yield
    sys.argv[:] = orig_argv


@pytest.fixture(autouse=True)
def home_tmpdir(tmpdir, monkeypatch):
    """
    Point HOME environment variable underneath tmpdir for the duration of tests.

    The google-auth library looks for application default credentials under $HOME,
    so tests must never inherit the user's environment.
    """
    homedir = str(tmpdir.mkdir("home"))
    monkeypatch.setenv("HOME", homedir)


@pytest.fixture(autouse=True)
def restore_log_levels():
    """Restore the levels of the loggers adjusted by ``--debug`` after each test."""
    loggers = [logging.getLogger(name) for name in ("pubtools.gcloud", "pubtools", "")]
    levels = [logger.level for logger in loggers]
    yield
    for logger, level in zip(loggers, levels):
        logger.setLevel(level)
