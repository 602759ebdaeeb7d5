"""Module for Jira search and schema discovery operations."""

import logging
from typing import Any, Literal

from ..exceptions import UpstreamUnavailableError
from .client import JiraClient
from .utils import build_search_jql, parse_field_filter

logger = logging.getLogger("mcp-jira")

DEFAULT_SEARCH_LIMIT = 50
MAX_SEARCH_LIMIT = 100


class SearchMixin(JiraClient):
    """Mixin for Jira search and discovery operations."""

    async def search_issues(
        self,
        text: str | None = None,
        status: str | None = None,
        assignee: str | None = None,
        jql: str | None = None,
        limit: int = DEFAULT_SEARCH_LIMIT,
        fields: str | None = None,
    ) -> dict[str, Any]:
        """
        Search issues with combined filters.

        Only the first page of results is returned.

        Args:
            text: Free text matched with ``text ~``
            status: Exact status name
            assignee: "me", "unassigned" or an account identifier
            jql: Raw JQL; a trailing ORDER BY is kept last
            limit: Maximum number of results (1-100)
            fields: Field preset or list, as accepted by get_issue

        Returns:
            The JQL used, the total count and the issues
        """
        if not 1 <= limit <= MAX_SEARCH_LIMIT:
            raise ValueError(f"limit must be between 1 and {MAX_SEARCH_LIMIT}")

        assignee_id = None
        if assignee:
            # An unresolvable "me" falls back to the raw token.
            resolved = await self.assignee_resolver.resolve(assignee)
            assignee_id = assignee if resolved is None else resolved

        query = build_search_jql(
            text=text, status=status, assignee_id=assignee_id, jql=jql
        )
        body: dict[str, Any] = {"jql": query, "maxResults": limit}
        field_list = parse_field_filter(fields)
        if field_list:
            body["fields"] = field_list.split(",")

        logger.debug(f"Searching issues with JQL: {query}")
        result = await self._call(self.jira.post, "rest/api/2/search", data=body)
        if not isinstance(result, dict):
            raise UpstreamUnavailableError(
                f"Unexpected search response: {type(result).__name__}"
            )
        issues = result.get("issues", [])
        return {
            "jql": query,
            "total": result.get("total", len(issues)),
            "max_results": limit,
            "issues": issues,
        }

    async def list_fields(
        self, field_type: Literal["all", "system", "custom"] = "all"
    ) -> dict[str, Any]:
        """List the tenant's fields, optionally only system or custom ones."""
        fields = await self.gateway.list_fields()
        if field_type == "system":
            fields = [f for f in fields if not f.is_custom]
        elif field_type == "custom":
            fields = [f for f in fields if f.is_custom]
        return {
            "total": len(fields),
            "fields": [f.to_simplified_dict() for f in fields],
            "usage": (
                "Use field 'id' values in filter parameters. "
                "Example: fields='key summary customfield_10016'"
            ),
        }

    async def get_transitions(self, issue_key: str) -> list[dict[str, Any]]:
        """Get the transitions currently available on an issue."""
        transitions = await self.gateway.get_transitions(issue_key)
        return [t.to_simplified_dict() for t in transitions]
