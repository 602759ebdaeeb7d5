"""Tests for the Jira issue links mixin."""

import pytest

from mcp_jira.models.jira import LinkType


@pytest.mark.anyio
async def test_link_issues(jira_fetcher, mock_jira):
    result = await jira_fetcher.link_issues(LinkType.RELATES, "PROJ-1", "PROJ-2")

    mock_jira.post.assert_called_once_with(
        "rest/api/2/issueLink",
        data={
            "type": {"name": "Relates"},
            "inwardIssue": {"key": "PROJ-1"},
            "outwardIssue": {"key": "PROJ-2"},
        },
    )
    assert result["message"] == "Linked PROJ-1 to PROJ-2 with type Relates"


@pytest.mark.anyio
async def test_is_blocked_by_is_sent_as_reversed_blocks(jira_fetcher, mock_jira):
    result = await jira_fetcher.link_issues("Is blocked by", "PROJ-1", "PROJ-2")

    mock_jira.post.assert_called_once_with(
        "rest/api/2/issueLink",
        data={
            "type": {"name": "Blocks"},
            "inwardIssue": {"key": "PROJ-2"},
            "outwardIssue": {"key": "PROJ-1"},
        },
    )
    assert result["message"] == "Linked PROJ-1 to PROJ-2 with type Is blocked by"


@pytest.mark.anyio
async def test_cannot_link_to_itself(jira_fetcher, mock_jira):
    with pytest.raises(ValueError, match="itself"):
        await jira_fetcher.link_issues(LinkType.BLOCKS, "PROJ-1", "PROJ-1")

    mock_jira.post.assert_not_called()


@pytest.mark.anyio
async def test_delete_link(jira_fetcher, mock_jira):
    result = await jira_fetcher.delete_link("10050")

    mock_jira.delete.assert_called_once_with("rest/api/2/issueLink/10050")
    assert result == {"success": True, "message": "Link 10050 deleted successfully"}
