import asyncio
import os

import click
from dotenv import load_dotenv

__version__ = "0.1.0"

from .logging_config import log_operation, setup_logger

logger = setup_logger()


@click.command()
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (can be used multiple times)",
)
@click.option(
    "--env-file", type=click.Path(exists=True, dir_okay=False), help="Path to .env file"
)
@click.option(
    "--transport",
    type=click.Choice(["stdio", "streamable-http"]),
    default="stdio",
    help="Transport type (stdio or streamable-http)",
)
@click.option("--host", default="0.0.0.0", help="Host to bind for HTTP transport")  # noqa: S104
@click.option(
    "--port",
    default=8000,
    help="Port to listen on for HTTP transport",
)
@click.option(
    "--log-dir",
    help="Directory to store log files",
)
@click.option(
    "--log-to-file/--no-log-to-file",
    default=False,
    help="Enable/disable file logging",
)
@click.option(
    "--read-only/--no-read-only",
    default=None,
    help="Disable all write tools (defaults to READ_ONLY_MODE)",
)
@click.option(
    "--jira-url",
    help="Jira URL (e.g., https://your-domain.atlassian.net or https://jira.your-company.com)",
)
@click.option(
    "--jira-workspace",
    help="Jira Cloud workspace name, used when --jira-url is not given (e.g., 'acme')",
)
@click.option("--jira-username", help="Jira username/email (for Jira Cloud)")
@click.option("--jira-token", help="Jira API token (for Jira Cloud)")
@click.option(
    "--jira-personal-token",
    help="Jira Personal Access Token (for Jira Server/Data Center)",
)
@click.option(
    "--jira-ssl-verify/--no-jira-ssl-verify",
    default=None,
    help="Verify SSL certificates for Jira Server/Data Center (default: verify)",
)
@click.option(
    "--metadata-cache-ttl",
    type=click.IntRange(min=0),
    help="Seconds to cache field, issue type and user metadata (0 disables)",
)
def main(
    verbose: int,
    env_file: str | None,
    transport: str,
    host: str,
    port: int,
    log_dir: str | None,
    log_to_file: bool,
    read_only: bool | None,
    jira_url: str | None,
    jira_workspace: str | None,
    jira_username: str | None,
    jira_token: str | None,
    jira_personal_token: str | None,
    jira_ssl_verify: bool | None,
    metadata_cache_ttl: int | None,
) -> None:
    """MCP Jira Server - Jira tools with workspace-aware schema resolution.

    Supports both Atlassian Cloud and Jira Server/Data Center deployments.
    """
    # Configure logging based on verbosity
    logging_level = None
    if verbose == 1:
        logging_level = "INFO"
    elif verbose >= 2:
        logging_level = "DEBUG"

    setup_logger(
        name="mcp-jira",
        level=logging_level,
        log_to_file=log_to_file,
        log_dir=log_dir,
    )
    setup_logger(name="mcp-jira.server.main", level=logging_level)
    setup_logger(name="mcp-jira.servers.dependencies", level=logging_level)
    setup_logger(name="mcp_jira", level=logging_level)

    with log_operation(logger, "application_startup", app_version=__version__):
        # Load environment variables from file if specified, otherwise try default .env
        if env_file:
            logger.info(f"Loading environment from file: {env_file}")
            load_dotenv(env_file)
        else:
            logger.debug("Attempting to load environment from default .env file")
            load_dotenv()

        # Set environment variables from command line arguments if provided
        if jira_url:
            os.environ["JIRA_URL"] = jira_url
        if jira_workspace:
            os.environ["JIRA_WORKSPACE"] = jira_workspace
        if jira_username:
            os.environ["JIRA_USERNAME"] = jira_username
        if jira_token:
            os.environ["JIRA_API_TOKEN"] = jira_token
        if jira_personal_token:
            os.environ["JIRA_PERSONAL_TOKEN"] = jira_personal_token
        if metadata_cache_ttl is not None:
            os.environ["JIRA_METADATA_CACHE_TTL"] = str(metadata_cache_ttl)
        if read_only is not None:
            os.environ["READ_ONLY_MODE"] = str(read_only).lower()
        if log_dir:
            os.environ["LOG_DIR"] = log_dir

        # Set SSL verification for Jira Server/Data Center
        if jira_ssl_verify is not None:
            os.environ["JIRA_SSL_VERIFY"] = str(jira_ssl_verify).lower()

        from .servers import run_server

        logger.info(f"Starting MCP Jira v{__version__} with {transport} transport")

    asyncio.run(run_server(transport=transport, host=host, port=port))


__all__ = ["main", "__version__", "setup_logger", "log_operation"]

if __name__ == "__main__":
    main()
