"""Module for Jira issue operations."""

import asyncio
import logging
from typing import Any

from ..exceptions import MCPJiraAuthenticationError, UpstreamUnavailableError
from ..models.jira import (
    CreatedIssue,
    IssueTypeLabel,
    NotFound,
    Priority,
    ResolutionResult,
    TargetStatus,
)
from .client import JiraClient, require_resolved
from .utils import parse_field_filter, project_key_from_issue_key

logger = logging.getLogger("mcp-jira")

# Classic projects call the field "Story Points", team-managed ones
# "Story point estimate".
STORY_POINTS_FIELDS = ("Story Points", "Story point estimate")
STORY_POINT_ESTIMATE_FIELDS = ("Story point estimate", "Story Points")
EPIC_LINK_FIELD = "Epic Link"


async def _unresolved() -> None:
    return None


def _named(values: list[str] | None) -> list[dict[str, str]] | None:
    if values is None:
        return None
    return [{"name": value} for value in values]


class IssuesMixin(JiraClient):
    """Mixin for Jira issue operations."""

    async def create_issue(
        self,
        project_key: str,
        issue_type: IssueTypeLabel,
        summary: str,
        description: str | None = None,
        priority: Priority | None = None,
        parent_key: str | None = None,
        labels: list[str] | None = None,
        components: list[str] | None = None,
        story_points: float | None = None,
        story_point_estimate: float | None = None,
    ) -> CreatedIssue:
        """
        Create a new Jira issue.

        The issue type and the story point fields are resolved against the
        project's metadata concurrently before the issue is created.

        Args:
            project_key: The key of the project (e.g. 'PROJ')
            issue_type: Portable issue type label
            summary: Summary of the issue
            description: Plain-text description
            priority: Priority name
            parent_key: Parent issue key, required for subtask types
            labels: Labels to set
            components: Component names to set
            story_points: Value for the "Story Points" field
            story_point_estimate: Value for the "Story point estimate" field

        Returns:
            The created issue's id and key

        Raises:
            ValueError: If a type or field cannot be resolved, or a subtask
                type is requested without a parent
            UpstreamUnavailableError: If a Jira call fails
        """
        if not summary:
            raise ValueError("summary is required")
        issue_type = IssueTypeLabel(issue_type)

        type_result, points_result, estimate_result = await asyncio.gather(
            self.issue_type_resolver.resolve(project_key, issue_type),
            self.field_resolver.resolve(STORY_POINTS_FIELDS)
            if story_points is not None
            else _unresolved(),
            self.field_resolver.resolve(STORY_POINT_ESTIMATE_FIELDS)
            if story_point_estimate is not None
            else _unresolved(),
        )

        resolved_type = require_resolved(type_result)
        if resolved_type.is_subtask and not parent_key:
            raise ValueError(
                f"Issue type '{resolved_type.matched_name}' is a subtask type in "
                f"project {project_key}; parent_key is required."
            )

        fields: dict[str, Any] = {
            "project": {"key": project_key},
            "issuetype": {"id": resolved_type.identifier},
            "summary": summary,
        }
        if description:
            fields["description"] = description
        if priority:
            fields["priority"] = {"name": Priority(priority).value}
        if parent_key:
            fields["parent"] = {"key": parent_key}
        if labels is not None:
            fields["labels"] = labels
        if components is not None:
            fields["components"] = _named(components)
        if points_result is not None:
            fields[require_resolved(points_result).identifier] = story_points
        if estimate_result is not None:
            estimate_field = require_resolved(estimate_result)
            # Both values fall back to the same field on single-field tenants.
            if (
                estimate_field.identifier in fields
                and fields[estimate_field.identifier] != story_point_estimate
            ):
                raise ValueError(
                    f"story_points and story_point_estimate both resolve to "
                    f"'{estimate_field.matched_name}' ({estimate_field.identifier}) "
                    f"with different values; pass only one of them."
                )
            fields[estimate_field.identifier] = story_point_estimate

        response = await self._call(
            self.jira.post, "rest/api/2/issue", data={"fields": fields}
        )
        if not isinstance(response, dict):
            raise UpstreamUnavailableError(
                f"Unexpected response creating issue in {project_key}: {type(response).__name__}"
            )
        created = CreatedIssue.from_api_response(response)
        logger.info(f"Created {created.key} ({issue_type.value}) in {project_key}")
        return created

    async def get_issue(
        self, issue_key: str, fields: str | None = None
    ) -> dict[str, Any]:
        """
        Get a Jira issue.

        Args:
            issue_key: The issue key (e.g. 'PROJ-123')
            fields: Preset (minimal, basic, standard, detailed, full) or a
                space/comma separated list of field ids

        Returns:
            The raw issue payload
        """
        params: dict[str, Any] = {}
        field_list = parse_field_filter(fields)
        if field_list:
            params["fields"] = field_list
        issue = await self._call(
            self.jira.get, f"rest/api/2/issue/{issue_key}", params=params or None
        )
        if not isinstance(issue, dict):
            raise UpstreamUnavailableError(
                f"Unexpected response fetching {issue_key}: {type(issue).__name__}"
            )
        return issue

    async def update_status(
        self, issue_key: str, status: TargetStatus
    ) -> dict[str, Any]:
        """Move an issue to ``status`` through whichever transition reaches it."""
        status = TargetStatus(status)
        resolved = require_resolved(
            await self.transition_resolver.resolve(issue_key, status)
        )
        await self._call(
            self.jira.post,
            f"rest/api/2/issue/{issue_key}/transitions",
            data={"transition": {"id": resolved.identifier}},
        )
        return {
            "success": True,
            "message": f"Issue {issue_key} moved to {status.value}",
            "transition": {
                "id": resolved.identifier,
                "name": resolved.matched_name,
                "matched_via": resolved.matched_via.value,
            },
        }

    async def assign_issue(self, issue_key: str, assignee: str) -> dict[str, Any]:
        """
        Assign an issue.

        Args:
            issue_key: The issue key (e.g. 'PROJ-123')
            assignee: "me", "unassigned" or an account identifier

        Returns:
            Result message
        """
        account_id = await self.assignee_resolver.resolve(assignee)
        if account_id is None:
            raise ValueError(
                f"Could not resolve assignee '{assignee}': "
                "Jira did not return an identifier for the current user."
            )

        # Cloud identifies users by accountId, Server/Data Center by name.
        id_key = "accountId" if self.config.is_cloud else "name"
        await self._call(
            self.jira.put,
            f"rest/api/2/issue/{issue_key}/assignee",
            data={id_key: account_id or None},
        )
        if account_id == "":
            return {"success": True, "message": f"Issue {issue_key} unassigned"}
        return {
            "success": True,
            "message": f"Issue {issue_key} assigned to {assignee}",
            "assignee": account_id,
        }

    async def edit_issue(
        self,
        issue_key: str,
        summary: str | None = None,
        description: str | None = None,
        issue_type: IssueTypeLabel | None = None,
        priority: Priority | None = None,
        labels: list[str] | None = None,
        components: list[str] | None = None,
    ) -> dict[str, Any]:
        """
        Update informational fields of an existing issue.

        A new issue type is resolved within the project named by the issue key.
        """
        fields: dict[str, Any] = {}
        if summary is not None:
            fields["summary"] = summary
        if description is not None:
            fields["description"] = description
        if issue_type is not None:
            project_key = project_key_from_issue_key(issue_key)
            resolved = require_resolved(
                await self.issue_type_resolver.resolve(project_key, issue_type)
            )
            fields["issuetype"] = {"id": resolved.identifier}
        if priority is not None:
            fields["priority"] = {"name": Priority(priority).value}
        if labels is not None:
            fields["labels"] = labels
        if components is not None:
            fields["components"] = _named(components)

        if not fields:
            raise ValueError("No fields to update were provided.")

        await self._call(
            self.jira.put, f"rest/api/2/issue/{issue_key}", data={"fields": fields}
        )
        return {
            "success": True,
            "message": f"Issue {issue_key} updated successfully",
            "updated_fields": sorted(fields),
        }

    async def set_story_points(
        self, issue_key: str, story_points: float
    ) -> dict[str, Any]:
        """
        Set the story point estimate of an issue.

        Only fields on the issue's edit screen are considered. When none
        matches, the error also reports what the global field catalog holds
        for each name, since a field may exist without being editable here.
        """
        result = await self.editable_field_selector.resolve(
            issue_key, STORY_POINTS_FIELDS
        )
        if isinstance(result, NotFound):
            raise ValueError(await self._story_points_diagnostic(issue_key, result))

        await self._call(
            self.jira.put,
            f"rest/api/2/issue/{issue_key}",
            data={"fields": {result.identifier: story_points}},
        )
        return {
            "success": True,
            "message": f"Story points set to {story_points} for issue {issue_key}",
            "field": {"id": result.identifier, "name": result.matched_name},
        }

    async def _story_points_diagnostic(
        self, issue_key: str, not_found: NotFound
    ) -> str:
        global_results = await asyncio.gather(
            *(self.field_resolver.resolve([name]) for name in STORY_POINTS_FIELDS)
        )
        detected = ", ".join(
            f"{name} = {res.identifier if isinstance(res, ResolutionResult) else 'not found'}"
            for name, res in zip(STORY_POINTS_FIELDS, global_results, strict=True)
        )
        return (
            f"Could not find an editable story points field for issue {issue_key}. "
            f"{not_found.message()} Field catalog: {detected}. "
            "Please ensure the field is on the issue's edit screen."
        )

    async def set_parent(self, issue_key: str, parent_key: str) -> dict[str, Any]:
        """
        Set or clear (``parent_key == ""``) the parent of an issue.

        If Jira rejects the ``parent`` field, the legacy "Epic Link" field is
        resolved from the field catalog and tried instead.
        """
        parent_value = {"key": parent_key} if parent_key else None
        try:
            await self._call(
                self.jira.put,
                f"rest/api/2/issue/{issue_key}",
                data={"fields": {"parent": parent_value}},
            )
        except MCPJiraAuthenticationError:
            raise
        except UpstreamUnavailableError as modern_error:
            error_text = str(modern_error)
            if "parent" not in error_text and "not found" not in error_text:
                raise
            resolved = await self.field_resolver.resolve([EPIC_LINK_FIELD])
            if isinstance(resolved, NotFound):
                raise
            logger.info(
                f"Parent field rejected for {issue_key}; retrying with {resolved.identifier} ({EPIC_LINK_FIELD})"
            )
            try:
                await self._call(
                    self.jira.put,
                    f"rest/api/2/issue/{issue_key}",
                    data={"fields": {resolved.identifier: parent_key or None}},
                )
            except UpstreamUnavailableError as legacy_error:
                raise UpstreamUnavailableError(
                    "Failed with both parent and Epic Link fields. "
                    f"Parent error: {modern_error}. Epic Link error: {legacy_error}"
                ) from legacy_error
            if parent_key:
                message = f"Issue {issue_key} linked to Epic {parent_key} (legacy field)"
            else:
                message = f"Epic link removed from issue {issue_key} (legacy field)"
            return {"success": True, "message": message}

        if parent_key:
            message = f"Issue {issue_key} linked to parent {parent_key}"
        else:
            message = f"Parent removed from issue {issue_key}"
        return {"success": True, "message": message}

    async def delete_issue(
        self, issue_key: str, delete_subtasks: bool = False
    ) -> dict[str, Any]:
        await self._call(
            self.jira.delete,
            f"rest/api/2/issue/{issue_key}",
            params={"deleteSubtasks": "true" if delete_subtasks else "false"},
        )
        return {"success": True, "message": f"Issue {issue_key} deleted successfully"}

    async def archive_issues(self, issue_keys: list[str]) -> dict[str, Any]:
        """Archive issues (Jira Cloud Premium/Enterprise only)."""
        if not issue_keys:
            raise ValueError("At least one issue key is required.")
        response = await self._call(
            self.jira.put,
            "rest/api/3/issue/archive",
            data={"issueIdsOrKeys": issue_keys},
        )
        return {"success": True, "issue_keys": issue_keys, "result": response}

    async def unarchive_issues(self, issue_keys: list[str]) -> dict[str, Any]:
        """Restore archived issues (Jira Cloud Premium/Enterprise only)."""
        if not issue_keys:
            raise ValueError("At least one issue key is required.")
        response = await self._call(
            self.jira.put,
            "rest/api/3/issue/unarchive",
            data={"issueIdsOrKeys": issue_keys},
        )
        return {"success": True, "issue_keys": issue_keys, "result": response}
