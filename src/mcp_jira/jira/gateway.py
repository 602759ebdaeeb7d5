"""Read-only access to a tenant's Jira schema metadata.

Resolvers depend on the MetadataGateway protocol only; JiraMetadataGateway is
the implementation backed by the synchronous ``atlassian.Jira`` client, each
call running in a worker thread.
"""

import asyncio
import logging
from abc import abstractmethod
from collections.abc import Callable
from typing import Any, Protocol, TypeVar

from atlassian import Jira

from ..exceptions import UpstreamUnavailableError
from ..models.jira import (
    CurrentUser,
    FieldDescriptor,
    ProjectIssueTypes,
    TransitionDescriptor,
)
from ..utils.decorators import handle_jira_api_errors

logger = logging.getLogger("mcp-jira")

T = TypeVar("T")


async def call_jira(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run a blocking ``atlassian.Jira`` call off the event loop.

    Errors are reported under the name of ``func`` (e.g. ``get_all_fields``).
    """

    async def run() -> T:
        return await asyncio.to_thread(func, *args, **kwargs)

    run.__name__ = getattr(func, "__name__", "API operation")
    return await handle_jira_api_errors("Jira API")(run)()


class MetadataGateway(Protocol):
    """Protocol for the metadata queries schema resolution relies on."""

    @abstractmethod
    async def list_fields(self) -> list[FieldDescriptor]:
        """Return the tenant-wide field catalog in catalog order."""

    @abstractmethod
    async def get_issue_types_for_project(
        self, project_key: str
    ) -> list[ProjectIssueTypes]:
        """Return createmeta project entries filtered by ``project_key``."""

    @abstractmethod
    async def get_transitions(self, issue_key: str) -> list[TransitionDescriptor]:
        """Return the transitions currently available on an issue."""

    @abstractmethod
    async def get_editable_fields(self, issue_key: str) -> list[FieldDescriptor]:
        """Return the fields on an issue's edit screen."""

    @abstractmethod
    async def get_current_user(self) -> CurrentUser:
        """Return the authenticated caller."""


def _expect(payload: Any, kind: type, what: str) -> Any:
    if not isinstance(payload, kind):
        raise UpstreamUnavailableError(
            f"Unexpected {what} payload from Jira: {type(payload).__name__}"
        )
    return payload


class JiraMetadataGateway:
    """MetadataGateway over Jira REST API v2."""

    def __init__(self, jira: Jira) -> None:
        self.jira = jira

    async def list_fields(self) -> list[FieldDescriptor]:
        raw = _expect(await call_jira(self.jira.get_all_fields), list, "field list")
        fields = [
            FieldDescriptor.from_api_response(item)
            for item in raw
            if isinstance(item, dict) and item.get("id")
        ]
        logger.debug(f"Fetched {len(fields)} fields from the field catalog")
        return fields

    async def get_issue_types_for_project(
        self, project_key: str
    ) -> list[ProjectIssueTypes]:
        raw = _expect(
            await call_jira(
                self.jira.get,
                "rest/api/2/issue/createmeta",
                params={"projectKeys": project_key, "expand": "projects.issuetypes"},
            ),
            dict,
            "createmeta",
        )
        return [
            ProjectIssueTypes.from_api_response(project)
            for project in raw.get("projects", [])
            if isinstance(project, dict)
        ]

    async def get_transitions(self, issue_key: str) -> list[TransitionDescriptor]:
        raw = _expect(
            await call_jira(self.jira.get, f"rest/api/2/issue/{issue_key}/transitions"),
            dict,
            "transitions",
        )
        transitions = [
            TransitionDescriptor.from_api_response(item)
            for item in raw.get("transitions", [])
            if isinstance(item, dict)
        ]
        logger.debug(f"{issue_key} has {len(transitions)} available transitions")
        return transitions

    async def get_editable_fields(self, issue_key: str) -> list[FieldDescriptor]:
        raw = _expect(
            await call_jira(self.jira.get, f"rest/api/2/issue/{issue_key}/editmeta"),
            dict,
            "editmeta",
        )
        fields = raw.get("fields") or {}
        if not isinstance(fields, dict):
            raise UpstreamUnavailableError(
                f"Unexpected editmeta 'fields' payload for {issue_key}"
            )
        return [
            FieldDescriptor.from_api_response(meta, field_id=field_id)
            for field_id, meta in fields.items()
            if isinstance(meta, dict)
        ]

    async def get_current_user(self) -> CurrentUser:
        raw = _expect(await call_jira(self.jira.myself), dict, "myself")
        return CurrentUser.from_api_response(raw)
