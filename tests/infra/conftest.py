"""
Shared fixtures for infra tests.

Tests use real filesystem operations with temporary directories.
"""

import pytest


@pytest.fixture
def tmp_storage(tmp_path):
    """Create a temporary storage root directory."""
    storage = tmp_path / "smartmd"
    storage.mkdir()
    return storage


@pytest.fixture
def log_dir(tmp_path):
    """Create a temp directory for logs."""
    log_path = tmp_path / "logs"
    log_path.mkdir()
    return log_path
