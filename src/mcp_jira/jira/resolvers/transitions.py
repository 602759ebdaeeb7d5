"""Resolution of a desired workflow status to an executable transition."""

import logging
from collections.abc import Callable

from ...models.jira import (
    MatchedVia,
    NotFound,
    NotFoundKind,
    ResolutionResult,
    TargetStatus,
    TransitionDescriptor,
)
from ..gateway import MetadataGateway
from .fields import names_equal

logger = logging.getLogger("mcp-jira")


class TransitionResolver:
    """
    Maps a target status to the id of a transition available on an issue.

    Transitions are actions ("Start Progress") while callers ask for a status
    ("In Progress"), so three passes run strictly in order, each over the full
    list of transitions:

    1. the transition's own name equals the status name
    2. the transition's destination status name equals the status name
    3. the destination status category equals the status's category bucket

    The first pass that matches anything short-circuits the rest.
    """

    def __init__(self, gateway: MetadataGateway) -> None:
        self.gateway = gateway

    async def resolve(
        self, issue_key: str, target: TargetStatus
    ) -> ResolutionResult | NotFound:
        transitions = await self.gateway.get_transitions(issue_key)
        wanted = target.value
        bucket = target.category

        passes: list[tuple[MatchedVia, Callable[[TransitionDescriptor], bool]]] = [
            (MatchedVia.EXACT_CANDIDATE, lambda t: names_equal(t.name, wanted)),
            (
                MatchedVia.TARGET_NAME,
                lambda t: names_equal(t.target_status_name, wanted),
            ),
            (
                MatchedVia.CATEGORY_FALLBACK,
                lambda t: t.target_status_category_key is bucket,
            ),
        ]

        for matched_via, predicate in passes:
            for transition in transitions:
                if predicate(transition):
                    logger.debug(
                        f"Transition {transition.id} ({transition.describe()}) "
                        f"selected for '{wanted}' on {issue_key} via {matched_via.value}"
                    )
                    return ResolutionResult(
                        identifier=transition.id,
                        matched_via=matched_via,
                        matched_name=transition.name,
                    )

        return NotFound(
            kind=NotFoundKind.TRANSITION,
            requested=(wanted,),
            available=tuple(t.describe() for t in transitions),
            scope=issue_key,
        )
