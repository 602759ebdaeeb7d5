"""Utility functions for Jira operations."""

import logging
import re

import dateutil.parser
import dateutil.tz

logger = logging.getLogger("mcp-jira")

# Field presets accepted wherever a field filter is.
FIELD_PRESETS: dict[str, tuple[str, ...]] = {
    "minimal": ("key", "summary", "status"),
    "basic": ("key", "summary", "status", "assignee", "priority", "issuetype"),
    "standard": (
        "key",
        "summary",
        "status",
        "assignee",
        "priority",
        "issuetype",
        "description",
        "reporter",
        "labels",
        "created",
        "updated",
    ),
    "detailed": (
        "key",
        "summary",
        "status",
        "assignee",
        "priority",
        "issuetype",
        "description",
        "reporter",
        "labels",
        "created",
        "updated",
        "components",
        "parent",
        "subtasks",
        "fixVersions",
        "comment",
    ),
    "full": ("*all",),
}

_ORDER_BY = re.compile(r"\border\s+by\b", re.IGNORECASE)

WORKLOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S.000%z"


def parse_field_filter(filter_str: str | None) -> str | None:
    """
    Turn a preset name or a list of field ids into the ``fields`` parameter.

    Custom lists may be separated by spaces or commas, e.g.
    ``"key summary customfield_10016"``.

    Returns:
        Comma separated field ids, or None when no filter was given
    """
    if not filter_str or not filter_str.strip():
        return None
    preset = FIELD_PRESETS.get(filter_str.strip().lower())
    if preset is not None:
        return ",".join(preset)
    parts = [part for part in re.split(r"[\s,]+", filter_str.strip()) if part]
    return ",".join(dict.fromkeys(parts))


def project_key_from_issue_key(issue_key: str) -> str:
    """Return the project part of an issue key ("PROJ-123" -> "PROJ")."""
    project_key, sep, number = issue_key.strip().rpartition("-")
    if not sep or not project_key or not number.isdigit():
        raise ValueError(f"Invalid issue key '{issue_key}'. Expected e.g. 'PROJ-123'.")
    return project_key


def quote_jql(value: str) -> str:
    """Quote a value for use in a JQL clause."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def split_order_by(jql: str) -> tuple[str, str | None]:
    """
    Split raw JQL into its predicate and its trailing ORDER BY clause.

    The last ``ORDER BY`` (any case) starts the clause.
    """
    matches = list(_ORDER_BY.finditer(jql))
    if not matches:
        return jql.strip(), None
    start = matches[-1].start()
    return jql[:start].strip(), jql[start:].strip()


def build_search_jql(
    text: str | None = None,
    status: str | None = None,
    assignee_id: str | None = None,
    jql: str | None = None,
) -> str:
    """
    Combine search filters into one JQL query.

    Clauses are ANDed in the order text, status, assignee, raw JQL. An
    ORDER BY found in the raw JQL is moved to the end of the combined query.
    ``assignee_id == ""`` means unassigned.
    """
    clauses: list[str] = []
    order_by = None

    if text:
        clauses.append(f"text ~ {quote_jql(text)}")
    if status:
        clauses.append(f"status = {quote_jql(status)}")
    if assignee_id is not None:
        if assignee_id == "":
            clauses.append("assignee is EMPTY")
        else:
            clauses.append(f"assignee = {quote_jql(assignee_id)}")
    if jql and jql.strip():
        predicate, order_by = split_order_by(jql)
        if predicate:
            clauses.append(f"({predicate})")

    query = " AND ".join(clauses)
    if order_by:
        query = f"{query} {order_by}" if query else order_by
    return query


def format_worklog_started(started: str | None) -> str | None:
    """
    Normalize a worklog start time to the format Jira expects.

    Accepts anything ``dateutil`` parses; naive values are sent as UTC.
    """
    if not started:
        return None
    try:
        parsed = dateutil.parser.isoparse(started)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Invalid started date '{started}': {e}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dateutil.tz.tzutc())
    return parsed.strftime(WORKLOG_DATE_FORMAT)
