"""
Test fixtures for Jira unit tests.

Provides configuration factories, a mocked ``atlassian.Jira`` client and a
mocked MetadataGateway so resolvers and mixins run without network access.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from mcp_jira.jira import JiraFetcher
from mcp_jira.jira.config import JiraConfig
from mcp_jira.jira.gateway import JiraMetadataGateway
from mcp_jira.models.jira import CurrentUser


@pytest.fixture
def jira_config_factory():
    """
    Factory for creating JiraConfig instances with customizable options.

    Example:
        def test_config(jira_config_factory):
            config = jira_config_factory(url="https://jira.example.com")
    """

    def _create_config(**overrides):
        defaults = {
            "url": "https://test.atlassian.net",
            "auth_type": "basic",
            "username": "test_username",
            "api_token": "test_token",
        }
        return JiraConfig(**{**defaults, **overrides})

    return _create_config


@pytest.fixture
def jira_config(jira_config_factory):
    return jira_config_factory()


@pytest.fixture
def mock_jira():
    """A MagicMock standing in for ``atlassian.Jira``."""
    return MagicMock()


@pytest.fixture
def mock_gateway():
    """
    A MetadataGateway whose methods are AsyncMocks.

    Every query returns an empty catalog unless a test sets ``return_value``.
    """
    gateway = AsyncMock(spec=JiraMetadataGateway)
    gateway.list_fields.return_value = []
    gateway.get_issue_types_for_project.return_value = []
    gateway.get_transitions.return_value = []
    gateway.get_editable_fields.return_value = []
    gateway.get_current_user.return_value = CurrentUser(
        identifier="account-123", display_name="Test User"
    )
    return gateway


@pytest.fixture
def jira_fetcher(jira_config, mock_jira, mock_gateway):
    """A JiraFetcher wired to the mocked client and gateway."""
    return JiraFetcher(config=jira_config, jira=mock_jira, gateway=mock_gateway)
