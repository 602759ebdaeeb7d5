"""Module for Jira comment and worklog operations."""

import logging
from typing import Any

from ..exceptions import UpstreamUnavailableError
from .client import JiraClient
from .utils import format_worklog_started

logger = logging.getLogger("mcp-jira")


class CommentsMixin(JiraClient):
    """Mixin for Jira comment and worklog operations."""

    async def add_comment(self, issue_key: str, comment: str) -> dict[str, Any]:
        """
        Add a comment to an issue.

        Args:
            issue_key: The issue key (e.g. 'PROJ-123')
            comment: Comment text

        Returns:
            The created comment's id, body, author and creation date
        """
        if not comment:
            raise ValueError("comment is required")
        result = await self._call(
            self.jira.post,
            f"rest/api/2/issue/{issue_key}/comment",
            data={"body": comment},
        )
        if not isinstance(result, dict):
            raise UpstreamUnavailableError(
                f"Unexpected response adding comment to {issue_key}: {type(result).__name__}"
            )
        author = result.get("author") or {}
        return {
            "id": result.get("id"),
            "body": result.get("body", comment),
            "created": result.get("created"),
            "author": author.get("displayName") if isinstance(author, dict) else None,
        }

    async def delete_comment(self, issue_key: str, comment_id: str) -> dict[str, Any]:
        await self._call(
            self.jira.delete, f"rest/api/2/issue/{issue_key}/comment/{comment_id}"
        )
        return {
            "success": True,
            "message": f"Comment {comment_id} deleted successfully",
        }

    async def add_worklog(
        self,
        issue_key: str,
        time_spent: str,
        started: str | None = None,
        comment: str | None = None,
    ) -> dict[str, Any]:
        """
        Log time spent on an issue.

        Args:
            issue_key: The issue key (e.g. 'PROJ-123')
            time_spent: Jira duration, e.g. '1h 30m', '2d'
            started: When the work started (ISO 8601); Jira uses now if omitted
            comment: Optional worklog comment

        Returns:
            The created worklog entry
        """
        if not time_spent or not time_spent.strip():
            raise ValueError("time_spent is required")

        worklog: dict[str, Any] = {"timeSpent": time_spent.strip()}
        started_value = format_worklog_started(started)
        if started_value:
            worklog["started"] = started_value
        if comment:
            worklog["comment"] = comment

        result = await self._call(
            self.jira.post, f"rest/api/2/issue/{issue_key}/worklog", data=worklog
        )
        if not isinstance(result, dict):
            raise UpstreamUnavailableError(
                f"Unexpected response logging work on {issue_key}: {type(result).__name__}"
            )
        logger.info(f"Logged {time_spent} on {issue_key}")
        return {
            "id": result.get("id"),
            "timeSpent": result.get("timeSpent", worklog["timeSpent"]),
            "timeSpentSeconds": result.get("timeSpentSeconds"),
            "started": result.get("started"),
            "comment": result.get("comment"),
        }
