"""Shared test fixtures for gl-provision tests."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from gl_provision.client import GitLabClient

MOCK_GITLAB_URL = "https://gitlab.example.com"
MOCK_API_URL = f"{MOCK_GITLAB_URL}/api/v4"


@pytest.fixture
def mock_client():
    """GitLabClient pointing at mock server."""
    return GitLabClient(MOCK_GITLAB_URL, "test-token")


@pytest.fixture
def sample_project() -> dict[str, Any]:
    """Sample create-project API response."""
    return {
        "id": 42,
        "name": "my-service",
        "path": "my-service",
        "path_with_namespace": "alice/my-service",
        "visibility": "private",
        "web_url": f"{MOCK_GITLAB_URL}/alice/my-service",
    }


@pytest.fixture
def sample_users() -> dict[str, dict[str, Any]]:
    """Directory entries keyed by username."""
    return {
        "alice": {"id": 7, "username": "alice", "name": "Alice"},
        "bob": {"id": 8, "username": "bob", "name": "Bob"},
        "bob2": {"id": 9, "username": "bob2", "name": "Bob Two"},
    }


def make_args(**kwargs) -> argparse.Namespace:
    """Helper to create argparse.Namespace with default values."""
    defaults = {
        "json_output": False,
        "verbose": False,
        "gitlab_url": None,
        "max_workers": 4,
    }
    defaults.update(kwargs)
    return argparse.Namespace(**defaults)


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop handlers installed by setup_logging so they don't outlive a test's captured streams."""
    yield
    logger = logging.getLogger("gl-provision")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
