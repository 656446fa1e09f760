"""Pytest configuration for tests.

Sets up Python path and fixtures for all tests.
"""

import sys
from pathlib import Path

import pytest

# Add project root to Python path so imports work correctly
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from tests.fixtures.fake_github import FakeGitHub  # noqa: E402
from workspace_sync.services.github import GitHubSyncService  # noqa: E402


@pytest.fixture
def fake_github():
    """A fake repository holding a README on ``main``."""
    return FakeGitHub()


@pytest.fixture
def client_factory(fake_github):
    return fake_github.client_factory()


@pytest.fixture
def service(client_factory):
    return GitHubSyncService(client_factory=client_factory)


@pytest.fixture(autouse=True)
def no_status_delay(monkeypatch):
    """Skip the pause between commit status lookups."""
    monkeypatch.setattr("workspace_sync.config.config.COMMIT_STATUS_DELAY_SECONDS", 0)
