"""Shared fixtures for integration tests."""

import os

import pytest

# Skip all integration tests unless RUN_OCTOLOOP_NETWORK_TESTS=1
pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_OCTOLOOP_NETWORK_TESTS") != "1",
    reason="Requires network access. Set RUN_OCTOLOOP_NETWORK_TESTS=1 to run",
)


@pytest.fixture
def github_token() -> str:
    token = os.environ.get("GITHUB_TOKEN")
    if not token:
        pytest.skip("GITHUB_TOKEN not set")
    return token
