"""
Jira agile models (boards and sprints).
"""

from typing import Any

from ..base import ApiModel


class JiraBoard(ApiModel):
    """
    Model representing a Jira agile board.
    """

    id: int
    name: str | None = None
    type: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraBoard":
        return cls(id=int(data["id"]), name=data.get("name"), type=data.get("type"))


class JiraSprint(ApiModel):
    """
    Model representing a Jira sprint.
    """

    id: int | None = None
    name: str | None = None
    state: str | None = None
    goal: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    origin_board_id: int | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "JiraSprint":
        """
        Create a JiraSprint from a Jira agile API response.
        """
        if not data:
            return cls()

        return cls(
            id=data.get("id"),
            name=data.get("name"),
            state=data.get("state"),
            goal=data.get("goal"),
            start_date=data.get("startDate"),
            end_date=data.get("endDate"),
            origin_board_id=data.get("originBoardId"),
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        """Convert to simplified dictionary for API response."""
        result = {
            "id": self.id,
            "name": self.name,
            "state": self.state,
            "goal": self.goal,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "originBoardId": self.origin_board_id,
        }
        return {k: v for k, v in result.items() if v is not None}
