"""Shared fixtures for the MCP Redmine test suite."""

import os
from unittest.mock import MagicMock, patch

import pytest

from mcp_redmine.redmine import RedmineConfig, RedmineFetcher, RetryPolicy
from mcp_redmine.servers import ToolDispatcher, build_registry


@pytest.fixture
def anyio_backend():
    """Run anyio-marked tests on asyncio only."""
    return "asyncio"


@pytest.fixture
def clean_env():
    """Environment without any Redmine or server settings."""
    with patch.dict(os.environ, {}, clear=True):
        yield


@pytest.fixture
def redmine_config():
    return RedmineConfig(
        url="https://redmine.example.com",
        auth_type="api_key",
        api_key="test-api-key",
    )


@pytest.fixture
def no_sleep():
    """Sleep replacement that records the requested delays."""
    return MagicMock(name="sleep")


@pytest.fixture
def mock_session():
    session = MagicMock()
    session.headers = {}
    session.auth = None
    return session


@pytest.fixture
def fetcher(redmine_config, mock_session, no_sleep):
    """Fetcher wired to a mocked requests session, retrying without waiting."""
    return RedmineFetcher(
        config=redmine_config,
        session=mock_session,
        retry_policy=RetryPolicy(max_retries=3, sleep=no_sleep),
    )


@pytest.fixture
def mock_fetcher():
    return MagicMock(spec=RedmineFetcher)


@pytest.fixture
def dispatcher(mock_fetcher):
    return ToolDispatcher(build_registry(), mock_fetcher)
