"""Shared fixtures for the snapshot diff tests."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config_logging import AppConfig, reset_config
from snapshot_diff import JdSnapshot

TEST_SECRET_KEY = "test-secret-key-for-snapshot-diff-0123456789"


def _make_app(csrf_enabled: bool, **overrides):
    from app import create_app
    config = AppConfig(secret_key=TEST_SECRET_KEY, csrf_enabled=csrf_enabled, **overrides)
    flask_app = create_app(config)
    flask_app.config['TESTING'] = True
    return flask_app


@pytest.fixture(autouse=True)
def _fresh_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def client():
    """Test client with CSRF enforcement off."""
    return _make_app(csrf_enabled=False).test_client()


@pytest.fixture
def csrf_client():
    """Test client with CSRF enforcement on."""
    return _make_app(csrf_enabled=True).test_client()


@pytest.fixture
def small_upload_client():
    """Test client with a 1 KB request body cap."""
    return _make_app(csrf_enabled=False, max_content_length=1024).test_client()


@pytest.fixture
def snapshot_history():
    """Three JD versions of one job card, newest first like the store returns them."""
    return [
        JdSnapshot(3, "2026-03-01T09:00:00", "Backend Engineer\nHybrid (NYC)\nPython\nKubernetes"),
        JdSnapshot(2, "2026-02-01T09:00:00", "Backend Engineer\nHybrid (NYC)\nPython"),
        JdSnapshot(1, "2026-01-01T09:00:00", "Backend Engineer\nRemote (US)\nPython"),
    ]
