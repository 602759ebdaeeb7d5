"""Dependency providers for JiraFetcher.

Provides get_jira_fetcher for use in tool functions.
"""

from __future__ import annotations

import logging

from fastmcp import Context

from mcp_jira.jira import JiraFetcher
from mcp_jira.servers.context import MainAppContext

logger = logging.getLogger("mcp-jira.servers.dependencies")


def get_app_context(ctx: Context) -> MainAppContext | None:
    lifespan_ctx_dict = ctx.request_context.lifespan_context
    return (
        lifespan_ctx_dict.get("app_lifespan_context")
        if isinstance(lifespan_ctx_dict, dict)
        else None
    )


async def get_jira_fetcher(ctx: Context) -> JiraFetcher:
    """Returns the JiraFetcher created by the server lifespan.

    Raises:
        ValueError: If Jira is not configured.
    """
    app_lifespan_ctx = get_app_context(ctx)
    if app_lifespan_ctx is None or app_lifespan_ctx.jira_fetcher is None:
        logger.error("Jira fetcher requested but Jira is not configured.")
        raise ValueError(
            "Jira client (fetcher) not available. Ensure server is configured correctly."
        )
    return app_lifespan_ctx.jira_fetcher
