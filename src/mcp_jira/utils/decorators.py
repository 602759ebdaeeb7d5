import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

import requests
from fastmcp import Context
from requests.exceptions import HTTPError

from mcp_jira.exceptions import MCPJiraAuthenticationError, UpstreamUnavailableError

logger = logging.getLogger(__name__)


F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def check_write_access(func: F) -> F:
    """
    Decorator for FastMCP tools to check if the application is in read-only mode.
    If in read-only mode, it raises a ValueError.
    Assumes the decorated function is async and has `ctx: Context` as its first argument.
    """

    @wraps(func)
    async def wrapper(ctx: Context, *args: Any, **kwargs: Any) -> Any:
        lifespan_ctx_dict = ctx.request_context.lifespan_context
        app_lifespan_ctx = (
            lifespan_ctx_dict.get("app_lifespan_context")
            if isinstance(lifespan_ctx_dict, dict)
            else None
        )

        if app_lifespan_ctx is not None and app_lifespan_ctx.read_only:
            tool_name = func.__name__
            action_description = tool_name.replace("_", " ")
            logger.warning(f"Attempted to call tool '{tool_name}' in read-only mode.")
            raise ValueError(f"Cannot {action_description} in read-only mode.")

        return await func(ctx, *args, **kwargs)

    return wrapper  # type: ignore


def handle_jira_api_errors(service_name: str = "Jira API") -> Callable[[F], F]:
    """
    Decorator translating transport failures of an async Jira call into
    UpstreamUnavailableError / MCPJiraAuthenticationError.

    Nothing is retried and nothing is swallowed: the original exception is
    chained as the cause.

    Args:
        service_name: Name of the service for error messages (e.g., "Jira API").
    """

    def decorator(func: F) -> F:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            operation_name = getattr(func, "__name__", "API operation")
            try:
                return await func(*args, **kwargs)
            except HTTPError as http_err:
                status_code = (
                    http_err.response.status_code
                    if http_err.response is not None
                    else None
                )
                if status_code in (401, 403):
                    error_msg = (
                        f"Authentication failed for {service_name} ({status_code}) "
                        f"during {operation_name}. "
                        "Token may be expired or invalid. Please verify credentials."
                    )
                    logger.error(error_msg)
                    raise MCPJiraAuthenticationError(error_msg) from http_err
                logger.error(f"HTTP error during {operation_name}: {http_err}")
                raise UpstreamUnavailableError(
                    f"{service_name} request failed during {operation_name}: {http_err}"
                ) from http_err
            except requests.RequestException as e:
                logger.error(f"Network error during {operation_name}: {str(e)}")
                raise UpstreamUnavailableError(
                    f"{service_name} is unreachable during {operation_name}: {e}"
                ) from e

        return wrapper  # type: ignore

    return decorator
