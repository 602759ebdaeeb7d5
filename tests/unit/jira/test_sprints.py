"""Tests for the Jira boards and sprints mixin."""

import pytest

from mcp_jira.models.jira import JiraSprint, SprintState

BOARDS = {"values": [{"id": 7, "name": "PROJ board", "type": "scrum"}]}


class TestFindBoard:
    @pytest.mark.anyio
    async def test_by_name(self, jira_fetcher, mock_jira):
        mock_jira.get_all_agile_boards.return_value = BOARDS

        board = await jira_fetcher.find_board(board_name="PROJ board")

        assert board.id == 7
        mock_jira.get_all_agile_boards.assert_called_once_with(board_name="PROJ board")

    @pytest.mark.anyio
    async def test_by_project(self, jira_fetcher, mock_jira):
        mock_jira.get_all_agile_boards.return_value = BOARDS

        await jira_fetcher.find_board(project_key="PROJ")

        mock_jira.get_all_agile_boards.assert_called_once_with(project_key="PROJ")

    @pytest.mark.anyio
    async def test_requires_an_argument(self, jira_fetcher):
        with pytest.raises(ValueError, match="Either board_name or project_key"):
            await jira_fetcher.find_board()

    @pytest.mark.anyio
    async def test_not_found(self, jira_fetcher, mock_jira):
        mock_jira.get_all_agile_boards.return_value = {"values": []}

        with pytest.raises(ValueError, match="Board not found for project PROJ"):
            await jira_fetcher.find_board(project_key="PROJ")


@pytest.mark.anyio
async def test_get_board_sprints(jira_fetcher, mock_jira):
    mock_jira.get_all_agile_boards.return_value = BOARDS
    mock_jira.get_all_sprints_from_board.return_value = {
        "values": [{"id": 1, "name": "Sprint 1", "state": "active"}]
    }

    result = await jira_fetcher.get_board_sprints(project_key="PROJ", state=SprintState.ACTIVE)

    mock_jira.get_all_sprints_from_board.assert_called_once_with(
        board_id=7, state="active", start=0, limit=50
    )
    assert result == {
        "board": {"id": 7, "name": "PROJ board", "type": "scrum"},
        "sprints": [{"id": 1, "name": "Sprint 1", "state": "active"}],
    }


@pytest.mark.anyio
async def test_get_board_backlog(jira_fetcher, mock_jira):
    mock_jira.get_all_agile_boards.return_value = BOARDS
    mock_jira.get.return_value = {"total": 3, "issues": [{"key": "PROJ-5"}]}

    result = await jira_fetcher.get_board_backlog(project_key="PROJ", limit=1)

    mock_jira.get.assert_called_once_with(
        "rest/agile/1.0/board/7/backlog", params={"maxResults": 1}
    )
    assert result["total"] == 3
    assert result["issues"] == [{"key": "PROJ-5"}]


class TestRankIssues:
    @pytest.mark.anyio
    async def test_rank_after(self, jira_fetcher, mock_jira):
        await jira_fetcher.rank_issues(["PROJ-2", "PROJ-3"], after_issue_key="PROJ-1")

        mock_jira.put.assert_called_once_with(
            "rest/agile/1.0/issue/rank",
            data={"issues": ["PROJ-2", "PROJ-3"], "rankAfterIssue": "PROJ-1"},
        )

    @pytest.mark.anyio
    async def test_rank_before(self, jira_fetcher, mock_jira):
        await jira_fetcher.rank_issues(["PROJ-2"], before_issue_key="PROJ-1")

        mock_jira.put.assert_called_once_with(
            "rest/agile/1.0/issue/rank",
            data={"issues": ["PROJ-2"], "rankBeforeIssue": "PROJ-1"},
        )

    @pytest.mark.anyio
    @pytest.mark.parametrize(
        ("after", "before"), [(None, None), ("PROJ-1", "PROJ-4")]
    )
    async def test_exactly_one_anchor(self, jira_fetcher, mock_jira, after, before):
        with pytest.raises(ValueError, match="Exactly one"):
            await jira_fetcher.rank_issues(
                ["PROJ-2"], after_issue_key=after, before_issue_key=before
            )

        mock_jira.put.assert_not_called()


class TestCreateSprint:
    @pytest.mark.anyio
    async def test_create(self, jira_fetcher, mock_jira):
        mock_jira.create_sprint.return_value = {
            "id": 12,
            "name": "Sprint 12",
            "state": "future",
            "originBoardId": 7,
        }

        sprint = await jira_fetcher.create_sprint(
            7,
            " Sprint 12 ",
            goal="Ship it",
            start_date="2024-05-01T09:00:00.000Z",
            end_date="2024-05-14T17:00:00.000Z",
        )

        mock_jira.create_sprint.assert_called_once_with(
            name="Sprint 12",
            board_id=7,
            start_date="2024-05-01T09:00:00.000Z",
            end_date="2024-05-14T17:00:00.000Z",
            goal="Ship it",
        )
        assert sprint == JiraSprint(id=12, name="Sprint 12", state="future", origin_board_id=7)

    @pytest.mark.anyio
    async def test_name_too_long(self, jira_fetcher, mock_jira):
        with pytest.raises(ValueError, match="30 characters or less"):
            await jira_fetcher.create_sprint(7, "x" * 31)

        mock_jira.create_sprint.assert_not_called()

    @pytest.mark.anyio
    async def test_end_before_start(self, jira_fetcher):
        with pytest.raises(ValueError, match="Start date must be before end date"):
            await jira_fetcher.create_sprint(
                7, "Sprint", start_date="2024-05-14", end_date="2024-05-01"
            )

    @pytest.mark.anyio
    async def test_invalid_date(self, jira_fetcher):
        with pytest.raises(ValueError, match="Invalid start_date"):
            await jira_fetcher.create_sprint(7, "Sprint", start_date="next monday")


class TestUpdateSprint:
    @pytest.mark.anyio
    async def test_merges_current_values(self, jira_fetcher, mock_jira):
        mock_jira.get_sprint.return_value = {
            "id": 12,
            "name": "Sprint 12",
            "state": "future",
            "goal": "Old goal",
        }
        mock_jira.put.return_value = {"id": 12, "name": "Sprint 12", "state": "future", "goal": "New goal"}

        sprint = await jira_fetcher.update_sprint(12, goal="New goal")

        mock_jira.put.assert_called_once_with(
            "rest/agile/1.0/sprint/12",
            data={"name": "Sprint 12", "state": "future", "goal": "New goal"},
        )
        assert sprint.goal == "New goal"

    @pytest.mark.anyio
    async def test_activation_requires_dates(self, jira_fetcher, mock_jira):
        mock_jira.get_sprint.return_value = {"id": 12, "name": "Sprint 12", "state": "future"}

        with pytest.raises(ValueError, match="start_date and end_date are required"):
            await jira_fetcher.update_sprint(12, state=SprintState.ACTIVE)

        mock_jira.put.assert_not_called()

    @pytest.mark.anyio
    async def test_activation_with_dates(self, jira_fetcher, mock_jira):
        mock_jira.get_sprint.return_value = {"id": 12, "name": "Sprint 12", "state": "future"}
        mock_jira.put.return_value = None

        sprint = await jira_fetcher.update_sprint(
            12,
            state="active",
            start_date="2024-05-01T09:00:00.000Z",
            end_date="2024-05-14T17:00:00.000Z",
        )

        assert sprint.state == "active"
        assert sprint.id == 12
        assert sprint.start_date == "2024-05-01T09:00:00.000Z"


@pytest.mark.anyio
async def test_add_issues_to_sprint(jira_fetcher, mock_jira):
    result = await jira_fetcher.add_issues_to_sprint(12, ["PROJ-1", "PROJ-2"])

    mock_jira.add_issues_to_sprint.assert_called_once_with(12, ["PROJ-1", "PROJ-2"])
    assert result["message"] == "2 issue(s) added to sprint 12"


@pytest.mark.anyio
async def test_delete_sprint(jira_fetcher, mock_jira):
    result = await jira_fetcher.delete_sprint(12)

    mock_jira.delete_sprint.assert_called_once_with(12)
    assert result["success"] is True
