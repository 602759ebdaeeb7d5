"""
Closed vocabularies accepted by the Jira tools.

Each member's value is the canonical human label sent to (or matched against)
Jira.
"""

from enum import Enum


class IssueTypeLabel(str, Enum):
    """Portable issue-type labels, resolved per project by IssueTypeResolver."""

    EPIC = "Epic"
    STORY = "Story"
    SUBTASK = "Subtask"
    TASK = "Task"
    FEATURE = "Feature"
    REQUEST = "Request"
    BUG = "Bug"


class Priority(str, Enum):
    HIGHEST = "Highest"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    LOWEST = "Lowest"


class StatusCategoryKey(str, Enum):
    """Jira's three status-category buckets."""

    NEW = "new"
    INDETERMINATE = "indeterminate"
    DONE = "done"


class TargetStatus(str, Enum):
    """Workflow outcomes a caller may ask for."""

    TO_DO = "To Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"
    IN_REVIEW = "In Review"
    BLOCKED = "Blocked"
    CANCELLED = "Cancelled"

    @property
    def category(self) -> StatusCategoryKey:
        """Coarse bucket used as the last-resort transition match."""
        return _STATUS_CATEGORY[self]


_STATUS_CATEGORY = {
    TargetStatus.TO_DO: StatusCategoryKey.NEW,
    TargetStatus.IN_PROGRESS: StatusCategoryKey.INDETERMINATE,
    TargetStatus.IN_REVIEW: StatusCategoryKey.INDETERMINATE,
    TargetStatus.BLOCKED: StatusCategoryKey.INDETERMINATE,
    TargetStatus.DONE: StatusCategoryKey.DONE,
    TargetStatus.CANCELLED: StatusCategoryKey.DONE,
}


class LinkType(str, Enum):
    BLOCKS = "Blocks"
    IS_BLOCKED_BY = "Is blocked by"
    CLONES = "Clones"
    RELATES = "Relates"
    DUPLICATES = "Duplicates"


class SprintState(str, Enum):
    ACTIVE = "active"
    FUTURE = "future"
    CLOSED = "closed"
