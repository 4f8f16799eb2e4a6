"""Pytest configuration and fixtures for release-installer tests."""

import logging
import os
import tempfile

import pytest

# Keep log files and settings.conf out of the user's home directory.
# Must run before release_installer is imported: loggers are created at
# import time.
_TEST_ROOT = tempfile.mkdtemp(prefix="release-installer-tests-")
os.environ.setdefault(
    "RELEASE_INSTALLER_LOG_DIR", os.path.join(_TEST_ROOT, "logs")
)
os.environ.setdefault(
    "RELEASE_INSTALLER_CONFIG_DIR", os.path.join(_TEST_ROOT, "config")
)


@pytest.fixture(autouse=True)
def enable_log_propagation():
    """Enable log propagation for all loggers during tests.

    This allows pytest's caplog fixture to capture logs from all loggers,
    even those created with propagate=False in production code.
    """
    original_propagation = {}
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("release_installer"):
            logger = logging.getLogger(name)
            original_propagation[name] = logger.propagate
            logger.propagate = True

    yield

    for name, propagate_value in original_propagation.items():
        logger = logging.getLogger(name)
        logger.propagate = propagate_value


@pytest.fixture
def chunk_gen():
    """Return a factory for async chunk generators.

    Mimics ``aiohttp.StreamReader.iter_chunked`` for mocked responses.
    """

    def factory(chunks):
        async def gen():
            for chunk in chunks:
                yield chunk

        return gen()

    return factory
