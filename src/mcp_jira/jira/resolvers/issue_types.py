"""Resolution of portable issue-type labels to per-project issue types."""

import logging

from ...models.jira import (
    IssueTypeLabel,
    MatchedVia,
    NotFound,
    NotFoundKind,
    ResolutionResult,
)
from ..gateway import MetadataGateway
from .fields import names_equal

logger = logging.getLogger("mcp-jira")


class IssueTypeResolver:
    """Maps an issue-type label to a project's issue type id and subtask flag."""

    def __init__(self, gateway: MetadataGateway) -> None:
        self.gateway = gateway

    async def resolve(
        self, project_key: str, label: IssueTypeLabel | str
    ) -> ResolutionResult | NotFound:
        """
        Resolve ``label`` within ``project_key``.

        The project key must match exactly. Within the project the first issue
        type whose name or untranslated name equals the label (ignoring case)
        wins; the untranslated name covers tenants with localized type names.

        Returns:
            ResolutionResult carrying ``is_subtask``, or NotFound of kind
            ``project`` or ``issueType``
        """
        requested = label.value if isinstance(label, IssueTypeLabel) else str(label)
        projects = await self.gateway.get_issue_types_for_project(project_key)

        project = next((p for p in projects if p.key == project_key), None)
        if project is None:
            logger.debug(f"Project {project_key} missing from createmeta response")
            return NotFound(
                kind=NotFoundKind.PROJECT,
                requested=(project_key,),
                available=tuple(p.key for p in projects),
            )

        for issue_type in project.issue_types:
            if names_equal(issue_type.name, requested) or names_equal(
                issue_type.untranslated_name, requested
            ):
                return ResolutionResult(
                    identifier=issue_type.id,
                    matched_via=MatchedVia.EXACT_CANDIDATE,
                    matched_name=issue_type.name,
                    is_subtask=issue_type.is_subtask,
                )

        return NotFound(
            kind=NotFoundKind.ISSUE_TYPE,
            requested=(requested,),
            available=tuple(t.name for t in project.issue_types),
            scope=f"project {project_key}",
        )
