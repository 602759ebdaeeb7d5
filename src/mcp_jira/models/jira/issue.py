"""
Jira issue models.
"""

from typing import Any

from ..base import ApiModel


class CreatedIssue(ApiModel):
    """Identifiers Jira returns for a freshly created issue."""

    id: str
    key: str
    self_link: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "CreatedIssue":
        return cls(
            id=str(data.get("id", "")),
            key=str(data.get("key", "")),
            self_link=data.get("self"),
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        return {"id": self.id, "key": self.key, "self": self.self_link}
