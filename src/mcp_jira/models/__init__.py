"""
Pydantic models for mcp-jira.
"""

from .base import ApiModel

__all__ = ["ApiModel"]
