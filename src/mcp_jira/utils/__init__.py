"""
Utility functions for the mcp-jira server.
"""

from .env import first_env, getenv_int, is_env_ssl_verify, is_env_truthy
from .io import is_read_only_mode
from .urls import is_atlassian_cloud_url, tenant_of, workspace_url

__all__ = [
    "first_env",
    "getenv_int",
    "is_atlassian_cloud_url",
    "is_env_ssl_verify",
    "is_env_truthy",
    "is_read_only_mode",
    "tenant_of",
    "workspace_url",
]
