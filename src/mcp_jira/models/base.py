"""
Base models for Jira API data.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T", bound="ApiModel")


class ApiModel(BaseModel):
    """
    Base model for all API data.

    Instances are immutable: metadata is fetched fresh for each resolution and
    never edited in place.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @classmethod
    def from_api_response(cls: type[T], data: dict[str, Any], **kwargs: Any) -> T:
        """Create a model instance from a raw Jira API payload."""
        raise NotImplementedError("Subclasses must implement from_api_response")

    def to_simplified_dict(self) -> dict[str, Any]:
        """Convert to a compact dict for tool responses."""
        return self.model_dump(exclude_none=True)
