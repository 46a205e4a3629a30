"""Pytest configuration and shared fixtures."""

import logging
import os
import tempfile

import pytest

from securestring.config import SecretConfig
from securestring.sweeper import SweepScheduler


@pytest.fixture
def temp_directory():
    """Create a temporary directory for testing."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    # Cleanup
    import shutil
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture(autouse=True)
def isolate_filesystem(temp_directory, monkeypatch):
    """Isolate config discovery to a temporary directory."""
    monkeypatch.chdir(temp_directory)
    monkeypatch.delenv("SECURESTRING_CONFIG", raising=False)
    return temp_directory


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo root logger changes made by CLI invocations."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def fast_config():
    """Config with a short sweep interval for expiry tests."""
    return SecretConfig(sweep_interval_ms=20)


@pytest.fixture
def scheduler():
    """A private shared scheduler, shut down after the test."""
    sched = SweepScheduler(name="test-scheduler")
    yield sched
    sched.shutdown()


@pytest.fixture
def sample_config():
    """Sample configuration for testing."""
    return {
        "securestring": {
            "encoding": "utf-8",
            "sweep_interval_ms": 250,
            "digest_algorithm": "sha512",
            "debug": False,
        }
    }


@pytest.fixture
def write_config(temp_directory):
    """Write YAML text to a config file and return its path."""

    def _write(content: str, name: str = "securestring.yml") -> str:
        path = os.path.join(temp_directory, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path

    return _write
