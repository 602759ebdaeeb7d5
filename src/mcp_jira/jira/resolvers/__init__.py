"""Schema resolvers turning human-meaningful requests into Jira identifiers."""

from .assignee import AssigneeResolver
from .editable import EditableFieldSelector
from .fields import FieldNameResolver, match_field, names_equal
from .issue_types import IssueTypeResolver
from .transitions import TransitionResolver

__all__ = [
    "AssigneeResolver",
    "EditableFieldSelector",
    "FieldNameResolver",
    "IssueTypeResolver",
    "TransitionResolver",
    "match_field",
    "names_equal",
]
