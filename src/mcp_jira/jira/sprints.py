"""Module for Jira boards and sprints operations."""

import logging
from typing import Any

import dateutil.parser

from ..exceptions import UpstreamUnavailableError
from ..models.jira import JiraBoard, JiraSprint, SprintState
from .client import JiraClient

logger = logging.getLogger("mcp-jira")

MAX_SPRINT_NAME_LENGTH = 30


def _validate_sprint_name(name: str) -> str:
    name = name.strip()
    if not name:
        raise ValueError("Sprint name must not be empty")
    if len(name) > MAX_SPRINT_NAME_LENGTH:
        raise ValueError(
            f"Sprint name must be {MAX_SPRINT_NAME_LENGTH} characters or less "
            f"(got {len(name)} characters)"
        )
    return name


def _validate_dates(start_date: str | None, end_date: str | None) -> None:
    parsed = {}
    for label, value in (("start_date", start_date), ("end_date", end_date)):
        if value:
            try:
                parsed[label] = dateutil.parser.isoparse(value)
            except ValueError as e:
                raise ValueError(f"Invalid {label} '{value}': {e}") from e
    start, end = parsed.get("start_date"), parsed.get("end_date")
    if start and end:
        try:
            in_order = start < end
        except TypeError:
            # One is timezone-aware and the other is not.
            in_order = start.replace(tzinfo=None) < end.replace(tzinfo=None)
        if not in_order:
            raise ValueError("Start date must be before end date.")


class SprintsMixin(JiraClient):
    """Mixin for Jira boards and sprints operations."""

    async def find_board(
        self, board_name: str | None = None, project_key: str | None = None
    ) -> JiraBoard:
        """
        Find a board by name, or else by project.

        The first board Jira returns wins.

        Raises:
            ValueError: If neither argument is given or no board matches
        """
        if not board_name and not project_key:
            raise ValueError("Either board_name or project_key is required.")

        if board_name:
            boards = await self._call(
                self.jira.get_all_agile_boards, board_name=board_name
            )
        else:
            boards = await self._call(
                self.jira.get_all_agile_boards, project_key=project_key
            )

        values = boards.get("values", []) if isinstance(boards, dict) else []
        if not values:
            target = f"name '{board_name}'" if board_name else f"project {project_key}"
            raise ValueError(f"Board not found for {target}")
        board = JiraBoard.from_api_response(values[0])
        logger.debug(f"Using board {board.id} ({board.name})")
        return board

    async def get_board_sprints(
        self,
        board_name: str | None = None,
        project_key: str | None = None,
        state: SprintState | None = None,
    ) -> dict[str, Any]:
        board = await self.find_board(board_name, project_key)
        sprints = await self._call(
            self.jira.get_all_sprints_from_board,
            board_id=board.id,
            state=SprintState(state).value if state else None,
            start=0,
            limit=50,
        )
        values = sprints.get("values", []) if isinstance(sprints, dict) else []
        return {
            "board": board.to_simplified_dict(),
            "sprints": [
                JiraSprint.from_api_response(sprint).to_simplified_dict()
                for sprint in values
            ],
        }

    async def get_board_backlog(
        self,
        board_name: str | None = None,
        project_key: str | None = None,
        limit: int = 50,
    ) -> dict[str, Any]:
        """Get the first page of issues in a board's backlog."""
        board = await self.find_board(board_name, project_key)
        backlog = await self._call(
            self.jira.get,
            f"rest/agile/1.0/board/{board.id}/backlog",
            params={"maxResults": limit},
        )
        if not isinstance(backlog, dict):
            raise UpstreamUnavailableError(
                f"Unexpected backlog response for board {board.id}: {type(backlog).__name__}"
            )
        issues = backlog.get("issues", [])
        return {
            "board": board.to_simplified_dict(),
            "total": backlog.get("total", len(issues)),
            "issues": issues,
        }

    async def rank_issues(
        self,
        issue_keys: list[str],
        after_issue_key: str | None = None,
        before_issue_key: str | None = None,
    ) -> dict[str, Any]:
        """Rank ``issue_keys`` right after or right before another issue."""
        if not issue_keys:
            raise ValueError("At least one issue key is required.")
        if bool(after_issue_key) == bool(before_issue_key):
            raise ValueError(
                "Exactly one of after_issue_key or before_issue_key is required."
            )

        body: dict[str, Any] = {"issues": issue_keys}
        if after_issue_key:
            body["rankAfterIssue"] = after_issue_key
        else:
            body["rankBeforeIssue"] = before_issue_key

        await self._call(self.jira.put, "rest/agile/1.0/issue/rank", data=body)
        return {"success": True, "message": "Issues reordered successfully"}

    async def create_sprint(
        self,
        board_id: int,
        name: str,
        goal: str | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> JiraSprint:
        """
        Create a new future sprint on a board.

        Args:
            board_id: Board ID
            name: Sprint name (30 characters at most)
            goal: Sprint goal
            start_date: Start date in ISO format
            end_date: End date in ISO format

        Returns:
            Created sprint details
        """
        name = _validate_sprint_name(name)
        _validate_dates(start_date, end_date)

        sprint = await self._call(
            self.jira.create_sprint,
            name=name,
            board_id=board_id,
            start_date=start_date,
            end_date=end_date,
            goal=goal,
        )
        created = JiraSprint.from_api_response(sprint if isinstance(sprint, dict) else {})
        logger.info(f"Sprint created: {created.id} ({created.name})")
        return created

    async def update_sprint(
        self,
        sprint_id: int,
        name: str | None = None,
        goal: str | None = None,
        state: SprintState | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> JiraSprint:
        """
        Update a sprint, keeping current values for anything not given.

        Jira requires start and end dates when a sprint becomes active.
        """
        if name is not None:
            name = _validate_sprint_name(name)
        _validate_dates(start_date, end_date)

        current = await self._call(self.jira.get_sprint, sprint_id)
        if not isinstance(current, dict):
            raise UpstreamUnavailableError(
                f"Unexpected response fetching sprint {sprint_id}: {type(current).__name__}"
            )

        body: dict[str, Any] = {
            "name": name or current.get("name") or "Sprint",
            "state": SprintState(state).value
            if state
            else current.get("state") or SprintState.FUTURE.value,
        }
        for key, value in (
            ("goal", goal),
            ("startDate", start_date),
            ("endDate", end_date),
        ):
            merged = value if value is not None else current.get(key)
            if merged is not None:
                body[key] = merged

        if body["state"] == SprintState.ACTIVE.value and not (
            body.get("startDate") and body.get("endDate")
        ):
            raise ValueError("start_date and end_date are required to start a sprint.")

        updated = await self._call(
            self.jira.put, f"rest/agile/1.0/sprint/{sprint_id}", data=body
        )
        return JiraSprint.from_api_response(
            updated if isinstance(updated, dict) else {"id": sprint_id, **body}
        )

    async def add_issues_to_sprint(
        self, sprint_id: int, issue_keys: list[str]
    ) -> dict[str, Any]:
        if not issue_keys:
            raise ValueError("At least one issue key is required.")
        await self._call(self.jira.add_issues_to_sprint, sprint_id, issue_keys)
        return {
            "success": True,
            "message": f"{len(issue_keys)} issue(s) added to sprint {sprint_id}",
        }

    async def delete_sprint(self, sprint_id: int) -> dict[str, Any]:
        await self._call(self.jira.delete_sprint, sprint_id)
        return {"success": True, "message": f"Sprint {sprint_id} deleted successfully"}
