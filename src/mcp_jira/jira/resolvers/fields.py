"""Resolution of human field names against the tenant-wide field catalog."""

import logging
from collections.abc import Iterable, Sequence

from ...models.jira import (
    FieldDescriptor,
    MatchedVia,
    NotFound,
    NotFoundKind,
    ResolutionResult,
)
from ..gateway import MetadataGateway

logger = logging.getLogger("mcp-jira")


def names_equal(left: str | None, right: str | None) -> bool:
    """Case-insensitive exact comparison used by every resolver."""
    if left is None or right is None:
        return False
    return left.casefold() == right.casefold()


def match_field(
    candidates: Sequence[str], fields: Iterable[FieldDescriptor]
) -> tuple[FieldDescriptor, str] | None:
    """
    Return the first field whose display name equals a candidate.

    Candidates are tried in the caller's priority order and, for each one, the
    fields are scanned in the order given. The first candidate with any match
    wins even if a later candidate also matches. Duplicate display names are
    not detected: the earliest field in catalog order is returned.

    Args:
        candidates: Acceptable display names, highest priority first
        fields: Field catalog or edit-screen fields

    Returns:
        The matching field and the candidate that matched, or None
    """
    catalog = list(fields)
    for candidate in candidates:
        for field in catalog:
            if names_equal(field.display_name, candidate):
                return field, candidate
    return None


class FieldNameResolver:
    """Maps prioritized field names to a field id using the global catalog."""

    def __init__(self, gateway: MetadataGateway) -> None:
        self.gateway = gateway

    async def resolve(self, candidates: Sequence[str]) -> ResolutionResult | NotFound:
        fields = await self.gateway.list_fields()
        match = match_field(candidates, fields)
        if match is None:
            logger.debug(
                f"No field in the catalog matches {list(candidates)} "
                f"({len(fields)} fields checked)"
            )
            return NotFound(
                kind=NotFoundKind.FIELD,
                requested=tuple(candidates),
                available=tuple(f.display_name for f in fields),
                scope="the field catalog",
            )

        field, _ = match
        return ResolutionResult(
            identifier=field.id,
            matched_via=MatchedVia.EXACT_CANDIDATE,
            matched_name=field.display_name,
        )
