"""Configuration module for Jira API interactions."""

import os
from dataclasses import dataclass
from typing import Literal

from ..utils import (
    first_env,
    getenv_int,
    is_atlassian_cloud_url,
    is_env_ssl_verify,
    tenant_of,
    workspace_url,
)


@dataclass
class JiraConfig:
    """Jira API configuration.

    Handles authentication for both Jira Cloud (using username/API token)
    and Jira Server/Data Center (using personal access token).
    """

    url: str  # Base URL for Jira
    auth_type: Literal["basic", "token"]  # Authentication type
    username: str | None = None  # Email or username (Cloud)
    api_token: str | None = None  # API token (Cloud)
    personal_token: str | None = None  # Personal access token (Server/DC)
    ssl_verify: bool = True  # Whether to verify SSL certificates
    metadata_cache_ttl: int = 0  # Seconds; 0 disables the metadata cache

    @property
    def is_cloud(self) -> bool:
        """Check if this is a cloud instance.

        Returns:
            True if this is a cloud instance (atlassian.net), False otherwise.
            Localhost URLs are always considered non-cloud (Server/Data Center).
        """
        return is_atlassian_cloud_url(self.url)

    @property
    def tenant(self) -> str:
        """Identity of the workspace this config points at (its host name)."""
        return tenant_of(self.url)

    @classmethod
    def from_env(cls) -> "JiraConfig":
        """Create configuration from environment variables.

        Returns:
            JiraConfig with values from environment variables

        Raises:
            ValueError: If required environment variables are missing or invalid
        """
        url = cls.get_url()

        username = os.getenv("JIRA_USERNAME")
        api_token = first_env("JIRA_API_TOKEN", "JIRA_TOKEN")
        personal_token = os.getenv("JIRA_PERSONAL_TOKEN")

        is_cloud = is_atlassian_cloud_url(url)

        match (is_cloud, bool(username and api_token), bool(personal_token)):
            case (True, True, _):
                auth_type = "basic"
            case (True, False, _):
                msg = "Cloud authentication requires JIRA_USERNAME and JIRA_API_TOKEN"
                raise ValueError(msg)
            case (False, _, True):
                auth_type = "token"
            case (False, True, False):
                auth_type = "basic"
            case _:
                msg = "Server/Data Center authentication requires JIRA_PERSONAL_TOKEN"
                raise ValueError(msg)

        metadata_cache_ttl = getenv_int("JIRA_METADATA_CACHE_TTL", 0)
        if metadata_cache_ttl < 0:
            raise ValueError("JIRA_METADATA_CACHE_TTL must not be negative")

        return cls(
            url=url,
            auth_type=auth_type,
            username=username,
            api_token=api_token,
            personal_token=personal_token,
            ssl_verify=is_env_ssl_verify("JIRA_SSL_VERIFY"),
            metadata_cache_ttl=metadata_cache_ttl,
        )

    @staticmethod
    def get_url() -> str:
        """Get the Jira URL from JIRA_URL, or derive it from JIRA_WORKSPACE.

        Returns:
            The Jira base URL without a trailing slash
        """
        url = os.getenv("JIRA_URL")
        if url:
            return url.rstrip("/")
        workspace = os.getenv("JIRA_WORKSPACE")
        if workspace:
            return workspace_url(workspace)
        error_msg = "Missing required JIRA_URL (or JIRA_WORKSPACE) environment variable"
        raise ValueError(error_msg)
