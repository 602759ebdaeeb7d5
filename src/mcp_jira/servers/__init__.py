"""MCP server implementation for Jira."""

from .main import main_mcp, run_server

__all__ = ["main_mcp", "run_server"]
