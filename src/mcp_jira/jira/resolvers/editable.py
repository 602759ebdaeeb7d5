"""Resolution of field names against one issue's edit screen."""

import logging
from collections.abc import Sequence

from ...models.jira import MatchedVia, NotFound, NotFoundKind, ResolutionResult
from ..gateway import MetadataGateway
from .fields import match_field

logger = logging.getLogger("mcp-jira")


class EditableFieldSelector:
    """
    Picks the field to write on a specific issue.

    Unlike FieldNameResolver this only considers fields present on the issue's
    edit screen, which depends on its type, project and status. A field may be
    defined tenant-wide and still be missing here.
    """

    def __init__(self, gateway: MetadataGateway) -> None:
        self.gateway = gateway

    async def resolve(
        self, issue_key: str, candidates: Sequence[str]
    ) -> ResolutionResult | NotFound:
        fields = await self.gateway.get_editable_fields(issue_key)
        match = match_field(candidates, fields)
        if match is None:
            logger.debug(
                f"None of {list(candidates)} is on the edit screen of {issue_key}"
            )
            return NotFound(
                kind=NotFoundKind.FIELD,
                requested=tuple(candidates),
                available=tuple(f.display_name for f in fields),
                scope=f"the edit screen of {issue_key}",
            )

        field, _ = match
        return ResolutionResult(
            identifier=field.id,
            matched_via=MatchedVia.EXACT_CANDIDATE,
            matched_name=field.display_name,
        )
