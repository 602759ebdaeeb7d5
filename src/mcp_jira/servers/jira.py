"""Jira FastMCP server instance and tool definitions."""

import json
import logging
from typing import Annotated, Any, Literal

from fastmcp import Context, FastMCP
from pydantic import Field

from mcp_jira.logging_config import log_operation
from mcp_jira.models.jira import (
    IssueTypeLabel,
    LinkType,
    Priority,
    SprintState,
    TargetStatus,
)
from mcp_jira.servers.dependencies import get_jira_fetcher
from mcp_jira.utils.decorators import check_write_access

logger = logging.getLogger(__name__)

# Per Atlassian docs, Cloud project keys are 2-10 chars. Server/Data Center
# allows longer keys (configurable). We accept any length to support both.
ISSUE_KEY_PATTERN = r"^[A-Z][A-Z0-9_]+-\d+$"
PROJECT_KEY_PATTERN = r"^[A-Z][A-Z0-9_]+$"

jira_mcp = FastMCP(
    name="Jira MCP Service",
    instructions=(
        "Provides tools for Jira. Issue types, workflow statuses and story point "
        "fields are given by name and resolved against the workspace's own schema."
    ),
)

IssueKey = Annotated[
    str,
    Field(description="Jira issue key (e.g., 'PROJ-123')", pattern=ISSUE_KEY_PATTERN),
]
IssueKeys = Annotated[
    list[str],
    Field(description="List of Jira issue keys (e.g., ['PROJ-1', 'PROJ-2'])", min_length=1),
]
FieldFilter = Annotated[
    str | None,
    Field(
        description=(
            "(Optional) Fields to return. Presets: 'minimal', 'basic', 'standard', "
            "'detailed', 'full'. Custom: space or comma separated field ids, e.g. "
            "'key summary customfield_10016'. Use jira_fields_list to discover ids."
        ),
    ),
]
BoardName = Annotated[
    str | None, Field(description="(Optional) Board name. Takes precedence over project_key.")
]
BoardProject = Annotated[
    str | None,
    Field(description="(Optional) Project key whose first board is used."),
]


def _dumps(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


@jira_mcp.tool(
    tags={"jira", "write"},
    annotations={"title": "Create Issue", "destructiveHint": False},
)
@check_write_access
async def issue_create(
    ctx: Context,
    project_key: Annotated[
        str,
        Field(description="The JIRA project key (e.g. 'PROJ').", pattern=PROJECT_KEY_PATTERN),
    ],
    issue_type: Annotated[
        IssueTypeLabel,
        Field(
            description=(
                "Issue type label. Resolved per project, also against untranslated "
                "names of localized types. Subtask types require parent_key."
            )
        ),
    ],
    summary: Annotated[str, Field(description="Summary (title) of the issue", min_length=1)],
    description: Annotated[
        str | None, Field(description="(Optional) Plain-text issue description")
    ] = None,
    priority: Annotated[Priority | None, Field(description="(Optional) Priority")] = None,
    parent_key: Annotated[
        str | None,
        Field(
            description="(Optional) Parent issue key (Epic for stories, parent for subtasks)",
            pattern=ISSUE_KEY_PATTERN,
        ),
    ] = None,
    labels: Annotated[list[str] | None, Field(description="(Optional) Labels")] = None,
    components: Annotated[
        list[str] | None, Field(description="(Optional) Component names")
    ] = None,
    story_points: Annotated[
        float | None,
        Field(description="(Optional) Value for the 'Story Points' field", ge=0),
    ] = None,
    story_point_estimate: Annotated[
        float | None,
        Field(description="(Optional) Value for the 'Story point estimate' field", ge=0),
    ] = None,
) -> str:
    """Create a new Jira issue.

    Args:
        ctx: The FastMCP context.
        project_key: The JIRA project key.
        issue_type: Portable issue type label.
        summary: Summary/title of the issue.
        description: Issue description.
        priority: Priority name.
        parent_key: Parent issue key.
        labels: Labels to set.
        components: Component names.
        story_points: Story Points value.
        story_point_estimate: Story point estimate value.

    Returns:
        JSON string with the created issue's id and key.

    Raises:
        ValueError: If the type or a field cannot be resolved, in read-only mode, or Jira client unavailable.
    """
    jira = await get_jira_fetcher(ctx)
    with log_operation(logger, "issue_create", project=project_key):
        created = await jira.create_issue(
            project_key=project_key,
            issue_type=issue_type,
            summary=summary,
            description=description,
            priority=priority,
            parent_key=parent_key,
            labels=labels,
            components=components,
            story_points=story_points,
            story_point_estimate=story_point_estimate,
        )
    return _dumps({"success": True, "issue": created.to_simplified_dict()})


@jira_mcp.tool(
    tags={"jira", "read"},
    annotations={"title": "Get Issue", "readOnlyHint": True},
)
async def issue_get(ctx: Context, issue_key: IssueKey, fields: FieldFilter = None) -> str:
    """Get details of a specific Jira issue.

    Args:
        ctx: The FastMCP context.
        issue_key: Jira issue key.
        fields: Field preset or list.

    Returns:
        JSON string representing the issue.
    """
    jira = await get_jira_fetcher(ctx)
    issue = await jira.get_issue(issue_key, fields=fields)
    return _dumps(issue)


@jira_mcp.tool(
    tags={"jira", "write"},
    annotations={"title": "Update Issue Status", "destructiveHint": True},
)
@check_write_access
async def issue_update_status(
    ctx: Context,
    issue_key: IssueKey,
    status: Annotated[
        TargetStatus,
        Field(
            description=(
                "Target status. The transition is found by its name, then by its "
                "destination status name, then by status category."
            )
        ),
    ],
) -> str:
    """Move an issue to a new workflow status.

    Args:
        ctx: The FastMCP context.
        issue_key: Jira issue key.
        status: Target status.

    Returns:
        JSON string describing the transition executed.

    Raises:
        ValueError: If no available transition reaches the status.
    """
    jira = await get_jira_fetcher(ctx)
    with log_operation(logger, "issue_update_status", issue=issue_key):
        result = await jira.update_status(issue_key, status)
    return _dumps(result)


@jira_mcp.tool(
    tags={"jira", "write"},
    annotations={"title": "Assign Issue", "destructiveHint": False},
)
@check_write_access
async def issue_assign(
    ctx: Context,
    issue_key: IssueKey,
    assignee: Annotated[
        str,
        Field(
            description="'me', 'unassigned', or the account ID (Cloud) / username (Server/DC) of the assignee",
            min_length=1,
        ),
    ],
) -> str:
    """Assign an issue to a user, to the caller, or to nobody."""
    jira = await get_jira_fetcher(ctx)
    result = await jira.assign_issue(issue_key, assignee)
    return _dumps(result)


@jira_mcp.tool(
    tags={"jira", "write"},
    annotations={"title": "Edit Issue Details", "destructiveHint": True},
)
@check_write_access
async def issue_edit_details(
    ctx: Context,
    issue_key: IssueKey,
    summary: Annotated[str | None, Field(description="(Optional) New summary")] = None,
    description: Annotated[
        str | None, Field(description="(Optional) New plain-text description")
    ] = None,
    issue_type: Annotated[
        IssueTypeLabel | None,
        Field(description="(Optional) New issue type, resolved in the issue's project"),
    ] = None,
    priority: Annotated[Priority | None, Field(description="(Optional) New priority")] = None,
    labels: Annotated[
        list[str] | None, Field(description="(Optional) Labels, replacing the current ones")
    ] = None,
    components: Annotated[
        list[str] | None,
        Field(description="(Optional) Component names, replacing the current ones"),
    ] = None,
) -> str:
    """Modify informational fields of an existing issue."""
    jira = await get_jira_fetcher(ctx)
    result = await jira.edit_issue(
        issue_key,
        summary=summary,
        description=description,
        issue_type=issue_type,
        priority=priority,
        labels=labels,
        components=components,
    )
    return _dumps(result)


@jira_mcp.tool(
    tags={"jira", "write"},
    annotations={"title": "Set Story Points", "destructiveHint": False},
)
@check_write_access
async def issue_set_story_points(
    ctx: Context,
    issue_key: IssueKey,
    story_points: Annotated[float, Field(description="Story point value", ge=0)],
) -> str:
    """Set story points, writing whichever story point field is on the issue's edit screen.

    Raises:
        ValueError: If neither 'Story Points' nor 'Story point estimate' is editable;
            the message also reports what the field catalog contains.
    """
    jira = await get_jira_fetcher(ctx)
    result = await jira.set_story_points(issue_key, story_points)
    return _dumps(result)


@jira_mcp.tool(
    tags={"jira", "write"},
    annotations={"title": "Set Parent", "destructiveHint": False},
)
@check_write_access
async def issue_set_parent(
    ctx: Context,
    issue_key: IssueKey,
    parent_key: Annotated[
        str,
        Field(description="Parent (e.g. Epic) issue key, or an empty string to remove the parent"),
    ],
) -> str:
    """Link an issue to a parent Epic, or remove the parent link.

    Falls back to the legacy 'Epic Link' field when the parent field is rejected.
    """
    jira = await get_jira_fetcher(ctx)
    result = await jira.set_parent(issue_key, parent_key.strip())
    return _dumps(result)


@jira_mcp.tool(
    tags={"jira", "write"},
    annotations={"title": "Delete Issue", "destructiveHint": True},
)
@check_write_access
async def issue_delete(
    ctx: Context,
    issue_key: IssueKey,
    delete_subtasks: Annotated[
        bool, Field(description="Also delete the issue's subtasks")
    ] = False,
) -> str:
    """Permanently delete an issue."""
    jira = await get_jira_fetcher(ctx)
    result = await jira.delete_issue(issue_key, delete_subtasks=delete_subtasks)
    return _dumps(result)


@jira_mcp.tool(
    tags={"jira", "write"},
    annotations={"title": "Archive Issues", "destructiveHint": True},
)
@check_write_access
async def issue_archive(ctx: Context, issue_keys: IssueKeys) -> str:
    """Archive issues, removing them from search results while keeping their data."""
    jira = await get_jira_fetcher(ctx)
    result = await jira.archive_issues(issue_keys)
    return _dumps(result)


@jira_mcp.tool(
    tags={"jira", "write"},
    annotations={"title": "Unarchive Issues", "destructiveHint": False},
)
@check_write_access
async def issue_unarchive(ctx: Context, issue_keys: IssueKeys) -> str:
    """Restore previously archived issues."""
    jira = await get_jira_fetcher(ctx)
    result = await jira.unarchive_issues(issue_keys)
    return _dumps(result)


@jira_mcp.tool(
    tags={"jira", "write"},
    annotations={"title": "Add Comment", "destructiveHint": False},
)
@check_write_access
async def issue_add_comment(
    ctx: Context,
    issue_key: IssueKey,
    comment: Annotated[str, Field(description="Comment text", min_length=1)],
) -> str:
    """Add a comment to an issue.

    Returns:
        JSON string of the created comment.
    """
    jira = await get_jira_fetcher(ctx)
    result = await jira.add_comment(issue_key, comment)
    return _dumps({"success": True, "comment": result})


@jira_mcp.tool(
    tags={"jira", "write"},
    annotations={"title": "Delete Comment", "destructiveHint": True},
)
@check_write_access
async def issue_delete_comment(
    ctx: Context,
    issue_key: IssueKey,
    comment_id: Annotated[str, Field(description="ID of the comment to delete", min_length=1)],
) -> str:
    """Delete a comment from an issue."""
    jira = await get_jira_fetcher(ctx)
    result = await jira.delete_comment(issue_key, comment_id)
    return _dumps(result)


@jira_mcp.tool(
    tags={"jira", "write"},
    annotations={"title": "Log Work", "destructiveHint": False},
)
@check_write_access
async def issue_log_work(
    ctx: Context,
    issue_key: IssueKey,
    time_spent: Annotated[
        str, Field(description="Time spent in Jira format (e.g., '1h 30m', '1d', '30m')")
    ],
    started: Annotated[
        str | None,
        Field(description="(Optional) Start time in ISO 8601 (e.g. '2024-01-15T09:00:00+00:00')"),
    ] = None,
    comment: Annotated[str | None, Field(description="(Optional) Worklog comment")] = None,
) -> str:
    """Log time spent on an issue."""
    jira = await get_jira_fetcher(ctx)
    result = await jira.add_worklog(
        issue_key, time_spent, started=started, comment=comment
    )
    return _dumps({"success": True, "worklog": result})


@jira_mcp.tool(
    tags={"jira", "write"},
    annotations={"title": "Link Issues", "destructiveHint": False},
)
@check_write_access
async def issue_link(
    ctx: Context,
    link_type: Annotated[LinkType, Field(description="How the source relates to the target")],
    source_issue_key: Annotated[
        str, Field(description="Issue the link reads from", pattern=ISSUE_KEY_PATTERN)
    ],
    target_issue_key: Annotated[
        str, Field(description="Issue the link points to", pattern=ISSUE_KEY_PATTERN)
    ],
) -> str:
    """Create a link between two issues, e.g. 'PROJ-1 Blocks PROJ-2'."""
    jira = await get_jira_fetcher(ctx)
    result = await jira.link_issues(link_type, source_issue_key, target_issue_key)
    return _dumps(result)


@jira_mcp.tool(
    tags={"jira", "write"},
    annotations={"title": "Delete Issue Link", "destructiveHint": True},
)
@check_write_access
async def issue_delete_link(
    ctx: Context,
    link_id: Annotated[str, Field(description="The ID of the link to remove", min_length=1)],
) -> str:
    """Remove a link between two issues."""
    jira = await get_jira_fetcher(ctx)
    result = await jira.delete_link(link_id)
    return _dumps(result)


@jira_mcp.tool(
    tags={"jira", "read"},
    annotations={"title": "Search Issues", "readOnlyHint": True},
)
async def search_issues(
    ctx: Context,
    text: Annotated[str | None, Field(description="(Optional) Free text to search for")] = None,
    status: Annotated[str | None, Field(description="(Optional) Exact status name")] = None,
    assignee: Annotated[
        str | None,
        Field(description="(Optional) 'me', 'unassigned' or an account identifier"),
    ] = None,
    jql: Annotated[
        str | None,
        Field(
            description=(
                "(Optional) Raw JQL ANDed with the other filters. "
                "An ORDER BY clause is kept at the end."
            )
        ),
    ] = None,
    limit: Annotated[int, Field(description="Maximum number of results (1-100)", ge=1, le=100)] = 50,
    fields: FieldFilter = None,
) -> str:
    """Search issues by text, status, assignee and/or JQL. Returns the first page only.

    Returns:
        JSON string with the JQL used, the total and the issues.
    """
    jira = await get_jira_fetcher(ctx)
    result = await jira.search_issues(
        text=text, status=status, assignee=assignee, jql=jql, limit=limit, fields=fields
    )
    return _dumps(result)


@jira_mcp.tool(
    tags={"jira", "read"},
    annotations={"title": "List Fields", "readOnlyHint": True},
)
async def fields_list(
    ctx: Context,
    field_type: Annotated[
        Literal["all", "system", "custom"],
        Field(description="Which fields to list"),
    ] = "all",
) -> str:
    """List field ids, names and types of this workspace.

    System fields (summary, status) are the same everywhere; custom fields
    (Story Points, Sprint) are specific to the workspace.
    """
    jira = await get_jira_fetcher(ctx)
    result = await jira.list_fields(field_type)
    return _dumps(result)


@jira_mcp.tool(
    tags={"jira", "read"},
    annotations={"title": "Get Transitions", "readOnlyHint": True},
)
async def issue_get_transitions(ctx: Context, issue_key: IssueKey) -> str:
    """Get the transitions currently available on an issue, with their target statuses."""
    jira = await get_jira_fetcher(ctx)
    transitions = await jira.get_transitions(issue_key)
    return _dumps(transitions)


@jira_mcp.tool(
    tags={"jira", "read"},
    annotations={"title": "Get Board Sprints", "readOnlyHint": True},
)
async def board_get_sprints(
    ctx: Context,
    board_name: BoardName = None,
    project_key: BoardProject = None,
    state: Annotated[
        SprintState | None, Field(description="(Optional) Only sprints in this state")
    ] = None,
) -> str:
    """List the sprints of a board found by name or project."""
    jira = await get_jira_fetcher(ctx)
    result = await jira.get_board_sprints(board_name, project_key, state)
    return _dumps(result)


@jira_mcp.tool(
    tags={"jira", "read"},
    annotations={"title": "Get Board Backlog", "readOnlyHint": True},
)
async def board_get_backlog(
    ctx: Context,
    board_name: BoardName = None,
    project_key: BoardProject = None,
    limit: Annotated[int, Field(description="Maximum number of issues (1-100)", ge=1, le=100)] = 50,
) -> str:
    """Get the issues in a board's backlog."""
    jira = await get_jira_fetcher(ctx)
    result = await jira.get_board_backlog(board_name, project_key, limit)
    return _dumps(result)


@jira_mcp.tool(
    tags={"jira", "write"},
    annotations={"title": "Rank Issues", "destructiveHint": False},
)
@check_write_access
async def agile_rank_issues(
    ctx: Context,
    issue_keys: IssueKeys,
    after_issue_key: Annotated[
        str | None, Field(description="(Optional) Rank the issues right after this issue")
    ] = None,
    before_issue_key: Annotated[
        str | None, Field(description="(Optional) Rank the issues right before this issue")
    ] = None,
) -> str:
    """Reorder issues in the backlog or on a board. Give exactly one anchor issue."""
    jira = await get_jira_fetcher(ctx)
    result = await jira.rank_issues(issue_keys, after_issue_key, before_issue_key)
    return _dumps(result)


@jira_mcp.tool(
    tags={"jira", "write"},
    annotations={"title": "Create Sprint", "destructiveHint": False},
)
@check_write_access
async def sprint_create(
    ctx: Context,
    board_id: Annotated[int, Field(description="Board ID where the sprint is created")],
    name: Annotated[str, Field(description="Sprint name (30 characters at most)")],
    goal: Annotated[str | None, Field(description="(Optional) Sprint goal")] = None,
    start_date: Annotated[
        str | None, Field(description="(Optional) Start date (ISO 8601)")
    ] = None,
    end_date: Annotated[str | None, Field(description="(Optional) End date (ISO 8601)")] = None,
) -> str:
    """Create a new planned sprint.

    Returns:
        JSON string representing the created sprint.
    """
    jira = await get_jira_fetcher(ctx)
    sprint = await jira.create_sprint(board_id, name, goal, start_date, end_date)
    return _dumps(sprint.to_simplified_dict())


@jira_mcp.tool(
    tags={"jira", "write"},
    annotations={"title": "Update Sprint", "destructiveHint": True},
)
@check_write_access
async def sprint_update(
    ctx: Context,
    sprint_id: Annotated[int, Field(description="Sprint ID")],
    name: Annotated[str | None, Field(description="(Optional) New name, 30 characters at most")] = None,
    goal: Annotated[str | None, Field(description="(Optional) New goal")] = None,
    state: Annotated[
        SprintState | None,
        Field(description="(Optional) New state; 'active' starts and 'closed' completes the sprint"),
    ] = None,
    start_date: Annotated[
        str | None, Field(description="(Optional) Start date (ISO 8601), required to start a sprint")
    ] = None,
    end_date: Annotated[
        str | None, Field(description="(Optional) End date (ISO 8601), required to start a sprint")
    ] = None,
) -> str:
    """Update a sprint's details or change its state. Unspecified values are kept."""
    jira = await get_jira_fetcher(ctx)
    sprint = await jira.update_sprint(
        sprint_id,
        name=name,
        goal=goal,
        state=state,
        start_date=start_date,
        end_date=end_date,
    )
    return _dumps(sprint.to_simplified_dict())


@jira_mcp.tool(
    tags={"jira", "write"},
    annotations={"title": "Add Issues to Sprint", "destructiveHint": False},
)
@check_write_access
async def sprint_add_issues(
    ctx: Context,
    sprint_id: Annotated[int, Field(description="Sprint ID")],
    issue_keys: IssueKeys,
) -> str:
    """Move issues into a sprint."""
    jira = await get_jira_fetcher(ctx)
    result = await jira.add_issues_to_sprint(sprint_id, issue_keys)
    return _dumps(result)


@jira_mcp.tool(
    tags={"jira", "write"},
    annotations={"title": "Delete Sprint", "destructiveHint": True},
)
@check_write_access
async def sprint_delete(
    ctx: Context,
    sprint_id: Annotated[int, Field(description="Sprint ID to delete")],
) -> str:
    """Delete a planned sprint."""
    jira = await get_jira_fetcher(ctx)
    result = await jira.delete_sprint(sprint_id)
    return _dumps(result)
