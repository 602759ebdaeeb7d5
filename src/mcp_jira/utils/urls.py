"""URL-related utility functions for mcp-jira."""

import re
from urllib.parse import urlparse


def is_atlassian_cloud_url(url: str | None) -> bool:
    """Determine if a URL belongs to Atlassian Cloud or Server/Data Center.

    Args:
        url: The URL to check

    Returns:
        True if the URL is for an Atlassian Cloud instance, False for Server/Data Center
    """
    if not url:
        return False

    hostname = urlparse(url).hostname or ""

    # Localhost and private network addresses are always Server/Data Center
    if (
        hostname == "localhost"
        or re.match(r"^127\.", hostname)
        or re.match(r"^192\.168\.", hostname)
        or re.match(r"^10\.", hostname)
        or re.match(r"^172\.(1[6-9]|2[0-9]|3[0-1])\.", hostname)
    ):
        return False

    return (
        ".atlassian.net" in hostname
        or ".jira.com" in hostname
        or ".jira-dev.com" in hostname
        or "api.atlassian.com" in hostname
    )


def workspace_url(workspace: str) -> str:
    """Build the Cloud base URL for a workspace name (``acme`` -> ``https://acme.atlassian.net``)."""
    workspace = workspace.strip()
    if not workspace:
        raise ValueError("Workspace name must not be empty")
    if workspace.startswith(("http://", "https://")):
        return workspace.rstrip("/")
    return f"https://{workspace}.atlassian.net"


def tenant_of(url: str) -> str:
    """Return the tenant identity (lower-cased host) of a Jira base URL."""
    return (urlparse(url).hostname or url).lower()
