"""Tests for NotFound diagnostics."""

from mcp_jira.models.jira import NotFound, NotFoundKind


def test_field_message():
    result = NotFound(
        kind=NotFoundKind.FIELD,
        requested=("Story Points", "Story point estimate"),
        available=("Summary",),
        scope="the field catalog",
    )

    assert result.message() == (
        "Requested field Story Points / Story point estimate; none present "
        "in the field catalog. Available (1): Summary"
    )


def test_project_message():
    result = NotFound(kind=NotFoundKind.PROJECT, requested=("PROJ",), available=("OTHER",))

    assert result.message() == (
        "Project 'PROJ' not found in issue type metadata. Available (1): OTHER"
    )


def test_issue_type_message_without_available():
    result = NotFound(
        kind=NotFoundKind.ISSUE_TYPE, requested=("Epic",), scope="project PROJ"
    )

    assert result.message() == "Issue type 'Epic' not found in project PROJ. Available: none."


def test_simplified_dict():
    result = NotFound(
        kind=NotFoundKind.TRANSITION,
        requested=("Done",),
        available=("Reopen -> Backlog [new]",),
        scope="PROJ-1",
    )

    assert result.to_simplified_dict() == {
        "error": "No transition to 'Done' available in PROJ-1. Available (1): Reopen -> Backlog [new]",
        "kind": "transition",
        "requested": ["Done"],
        "available": ["Reopen -> Backlog [new]"],
    }
