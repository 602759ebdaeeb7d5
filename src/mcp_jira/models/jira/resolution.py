"""
Outcomes of schema resolution.

A resolver returns either a ResolutionResult or a NotFound. Upstream failures
are exceptions and never appear here.
"""

from enum import Enum
from typing import Any

from ..base import ApiModel


class MatchedVia(str, Enum):
    """Which rule produced a match. Diagnostic only."""

    EXACT_CANDIDATE = "exactCandidate"
    TARGET_NAME = "targetName"
    CATEGORY_FALLBACK = "categoryFallback"


class NotFoundKind(str, Enum):
    FIELD = "field"
    ISSUE_TYPE = "issueType"
    TRANSITION = "transition"
    PROJECT = "project"


class ResolutionResult(ApiModel):
    """A tenant identifier resolved from a human-meaningful request."""

    identifier: str
    matched_via: MatchedVia
    matched_name: str | None = None
    is_subtask: bool | None = None


class NotFound(ApiModel):
    """A resolution that exhausted every rule, with what was tried and seen."""

    kind: NotFoundKind
    requested: tuple[str, ...]
    available: tuple[str, ...] = ()
    scope: str | None = None

    def message(self) -> str:
        requested = " / ".join(self.requested) or "<nothing>"
        where = f" in {self.scope}" if self.scope else ""
        if self.kind is NotFoundKind.PROJECT:
            headline = f"Project '{requested}' not found in issue type metadata"
        elif self.kind is NotFoundKind.ISSUE_TYPE:
            headline = f"Issue type '{requested}' not found{where}"
        elif self.kind is NotFoundKind.TRANSITION:
            headline = f"No transition to '{requested}' available{where}"
        else:
            headline = f"Requested field {requested}; none present{where}"

        if not self.available:
            return f"{headline}. Available: none."
        return f"{headline}. Available ({len(self.available)}): " + ", ".join(
            self.available
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        return {
            "error": self.message(),
            "kind": self.kind.value,
            "requested": list(self.requested),
            "available": list(self.available),
        }
