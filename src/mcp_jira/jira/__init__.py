"""Jira API module for mcp-jira.

This module provides various Jira API client implementations.
"""

from .client import JiraClient
from .comments import CommentsMixin
from .config import JiraConfig
from .issues import IssuesMixin
from .links import LinksMixin
from .search import SearchMixin
from .sprints import SprintsMixin


class JiraFetcher(
    IssuesMixin,
    CommentsMixin,
    LinksMixin,
    SearchMixin,
    SprintsMixin,
):
    """
    The main Jira client class providing access to all Jira operations.

    This class inherits from multiple mixins that provide specific functionality:
    - IssuesMixin: Issue creation, transitions, assignment and edits
    - CommentsMixin: Comment and worklog operations
    - LinksMixin: Issue link operations
    - SearchMixin: JQL search, field catalog and transition discovery
    - SprintsMixin: Board, backlog and sprint operations

    Every mixin resolves tenant-specific identifiers through the resolvers
    built by JiraClient.
    """

    pass


__all__ = ["JiraClient", "JiraConfig", "JiraFetcher"]
