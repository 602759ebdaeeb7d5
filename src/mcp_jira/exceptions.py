class MCPJiraError(Exception):
    """Base exception for mcp-jira errors."""

    pass


class UpstreamUnavailableError(MCPJiraError):
    """Raised when a Jira REST call fails (network, HTTP or malformed payload).

    The original error is chained as ``__cause__``; callers never retry.
    """

    pass


class MCPJiraAuthenticationError(UpstreamUnavailableError):
    """Raised when Jira rejects the credentials (401/403)."""

    pass
