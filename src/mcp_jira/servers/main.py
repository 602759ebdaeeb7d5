"""Main FastMCP server setup for Jira integration."""

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Literal

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from mcp_jira.jira import JiraFetcher
from mcp_jira.jira.config import JiraConfig
from mcp_jira.utils.io import is_read_only_mode

from .context import MainAppContext
from .jira import jira_mcp

logger = logging.getLogger("mcp-jira.server.main")

Transport = Literal["stdio", "streamable-http"]


async def health_check(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


def load_jira_config() -> JiraConfig | None:
    """Load Jira configuration from the environment, or None if Jira is not set up."""
    if not (os.getenv("JIRA_URL") or os.getenv("JIRA_WORKSPACE")):
        logger.warning("JIRA_URL/JIRA_WORKSPACE not set; Jira tools will be unavailable.")
        return None
    return JiraConfig.from_env()


@asynccontextmanager
async def main_lifespan(app: FastMCP[MainAppContext]) -> AsyncIterator[dict]:
    logger.info("Main Jira MCP server lifespan starting...")
    read_only = is_read_only_mode()

    jira_config: JiraConfig | None = None
    jira_fetcher: JiraFetcher | None = None
    try:
        jira_config = load_jira_config()
    except ValueError as e:
        logger.error(f"Invalid Jira configuration: {e}")
        raise
    if jira_config is not None:
        jira_fetcher = JiraFetcher(config=jira_config)
        logger.info(
            f"Jira configuration loaded for {jira_config.tenant} "
            f"(auth: {jira_config.auth_type}, metadata cache ttl: {jira_config.metadata_cache_ttl}s)"
        )

    app_context = MainAppContext(
        jira_config=jira_config,
        jira_fetcher=jira_fetcher,
        read_only=read_only,
    )
    logger.info(f"Read-only mode: {'ENABLED' if read_only else 'DISABLED'}")

    try:
        yield {"app_lifespan_context": app_context}
    finally:
        logger.info("Main Jira MCP server lifespan shutdown complete.")


main_mcp = FastMCP(name="Jira MCP", lifespan=main_lifespan)
main_mcp.mount(jira_mcp, prefix="jira")


@main_mcp.custom_route("/healthz", methods=["GET"], include_in_schema=False)
async def _health_check_route(request: Request) -> JSONResponse:
    return await health_check(request)


async def run_server(
    transport: Transport = "stdio", host: str = "0.0.0.0", port: int = 8000  # noqa: S104
) -> None:
    """Run the Jira MCP server with the specified transport."""
    if transport == "stdio":
        await main_mcp.run_async(transport="stdio")
    else:
        logger.info(f"Serving streamable HTTP on {host}:{port} (health check at /healthz)")
        await main_mcp.run_async(transport="streamable-http", host=host, port=port)
