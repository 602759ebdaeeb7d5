"""
Jira schema metadata models.

These describe the tenant-specific schema the resolvers match against: the
field catalog, edit-screen fields, createmeta issue types, workflow
transitions and the calling user.
"""

import logging
from typing import Any

from ..base import ApiModel
from .enums import StatusCategoryKey

logger = logging.getLogger(__name__)

CUSTOM_FIELD_PREFIX = "customfield_"


class FieldDescriptor(ApiModel):
    """A field from the tenant-wide catalog or from an issue's edit screen."""

    id: str
    display_name: str
    is_custom: bool = False
    schema_type: str | None = None

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "FieldDescriptor":
        """
        Create a FieldDescriptor from a ``/field`` entry.

        ``kwargs['field_id']`` overrides the id; editmeta entries are keyed by
        id and may omit it from the body.
        """
        field_id = str(kwargs.get("field_id") or data.get("id") or data.get("key") or "")
        custom = data.get("custom")
        if not isinstance(custom, bool):
            custom = field_id.startswith(CUSTOM_FIELD_PREFIX)
        schema = data.get("schema")
        return cls(
            id=field_id,
            display_name=str(data.get("name") or ""),
            is_custom=custom,
            schema_type=schema.get("type") if isinstance(schema, dict) else None,
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.display_name,
            "type": self.schema_type or "unknown",
            "custom": self.is_custom,
        }


class IssueTypeDescriptor(ApiModel):
    """An issue type as configured for one project."""

    id: str
    name: str
    untranslated_name: str | None = None
    is_subtask: bool = False

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "IssueTypeDescriptor":
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name") or ""),
            untranslated_name=data.get("untranslatedName"),
            is_subtask=bool(data.get("subtask", False)),
        )


class ProjectIssueTypes(ApiModel):
    """One project entry of a createmeta response."""

    key: str
    issue_types: tuple[IssueTypeDescriptor, ...] = ()

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "ProjectIssueTypes":
        raw_types = data.get("issuetypes") or data.get("issueTypes") or []
        return cls(
            key=str(data.get("key", "")),
            issue_types=tuple(
                IssueTypeDescriptor.from_api_response(t)
                for t in raw_types
                if isinstance(t, dict) and t.get("id") is not None
            ),
        )


class TransitionDescriptor(ApiModel):
    """A workflow action currently available on an issue."""

    id: str
    name: str
    target_status_name: str = ""
    target_status_category_key: StatusCategoryKey | None = None

    @classmethod
    def from_api_response(
        cls, data: dict[str, Any], **kwargs: Any
    ) -> "TransitionDescriptor":
        to_status = data.get("to") if isinstance(data.get("to"), dict) else {}
        category = to_status.get("statusCategory")
        category_key: StatusCategoryKey | None = None
        if isinstance(category, dict) and category.get("key"):
            try:
                category_key = StatusCategoryKey(str(category["key"]).lower())
            except ValueError:
                logger.debug(
                    f"Unknown status category '{category['key']}' on transition {data.get('id')}"
                )
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name") or ""),
            target_status_name=str(to_status.get("name") or ""),
            target_status_category_key=category_key,
        )

    def describe(self) -> str:
        category = (
            self.target_status_category_key.value
            if self.target_status_category_key
            else "?"
        )
        return f"{self.name} -> {self.target_status_name} [{category}]"

    def to_simplified_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "to_status": self.target_status_name,
            "to_status_category": (
                self.target_status_category_key.value
                if self.target_status_category_key
                else None
            ),
        }


class CurrentUser(ApiModel):
    """Identity of the authenticated caller."""

    identifier: str | None = None
    display_name: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "CurrentUser":
        # Cloud exposes accountId; Server/Data Center only key or name.
        identifier = None
        for attr in ("accountId", "key", "name"):
            if isinstance(data.get(attr), str) and data[attr]:
                identifier = data[attr]
                break
        return cls(identifier=identifier, display_name=data.get("displayName"))
