"""Module for Jira issue link operations."""

import logging
from typing import Any

from ..models.jira import LinkType
from .client import JiraClient

logger = logging.getLogger("mcp-jira")


class LinksMixin(JiraClient):
    """Mixin for Jira issue link operations."""

    async def link_issues(
        self, link_type: LinkType, source_issue_key: str, target_issue_key: str
    ) -> dict[str, Any]:
        """
        Create a link reading "source <link_type> target".

        "Is blocked by" is the inward side of "Blocks", so it is sent as a
        Blocks link with the two issues swapped.
        """
        link_type = LinkType(link_type)
        if source_issue_key == target_issue_key:
            raise ValueError("Cannot link an issue to itself.")

        type_name = link_type.value
        inward, outward = source_issue_key, target_issue_key
        if link_type is LinkType.IS_BLOCKED_BY:
            type_name = LinkType.BLOCKS.value
            inward, outward = target_issue_key, source_issue_key

        await self._call(
            self.jira.post,
            "rest/api/2/issueLink",
            data={
                "type": {"name": type_name},
                "inwardIssue": {"key": inward},
                "outwardIssue": {"key": outward},
            },
        )
        return {
            "success": True,
            "message": f"Linked {source_issue_key} to {target_issue_key} with type {link_type.value}",
        }

    async def delete_link(self, link_id: str) -> dict[str, Any]:
        if not link_id:
            raise ValueError("link_id is required")
        await self._call(self.jira.delete, f"rest/api/2/issueLink/{link_id}")
        return {"success": True, "message": f"Link {link_id} deleted successfully"}
