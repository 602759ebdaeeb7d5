"""
Jira data models for mcp-jira.

Pydantic models for Jira schema metadata, resolution outcomes and the
agile/issue payloads returned by tools.
"""

from .agile import JiraBoard, JiraSprint
from .enums import (
    IssueTypeLabel,
    LinkType,
    Priority,
    SprintState,
    StatusCategoryKey,
    TargetStatus,
)
from .issue import CreatedIssue
from .metadata import (
    CurrentUser,
    FieldDescriptor,
    IssueTypeDescriptor,
    ProjectIssueTypes,
    TransitionDescriptor,
)
from .resolution import MatchedVia, NotFound, NotFoundKind, ResolutionResult

__all__ = [
    "CreatedIssue",
    "CurrentUser",
    "FieldDescriptor",
    "IssueTypeDescriptor",
    "IssueTypeLabel",
    "JiraBoard",
    "JiraSprint",
    "LinkType",
    "MatchedVia",
    "NotFound",
    "NotFoundKind",
    "Priority",
    "ProjectIssueTypes",
    "ResolutionResult",
    "SprintState",
    "StatusCategoryKey",
    "TargetStatus",
    "TransitionDescriptor",
]
