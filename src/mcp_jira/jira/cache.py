"""Optional TTL cache around a MetadataGateway.

Resolvers stay cache-oblivious: caching is enabled by wrapping the gateway,
never inside resolution logic. Entries are keyed by tenant, resource kind and
argument, so one cache can safely serve several workspaces. Only
issue-independent resources (field catalog, createmeta, current user) are
cached.
"""

import logging
from collections.abc import Awaitable, Callable, Hashable
from typing import Any, TypeVar

from cachetools import TTLCache

from ..models.jira import (
    CurrentUser,
    FieldDescriptor,
    ProjectIssueTypes,
    TransitionDescriptor,
)
from .gateway import MetadataGateway

logger = logging.getLogger("mcp-jira")

T = TypeVar("T")

DEFAULT_CACHE_SIZE = 256


class CachedMetadataGateway:
    """MetadataGateway decorator memoizing results for ``ttl`` seconds.

    Upstream failures are not cached.
    """

    def __init__(
        self,
        inner: MetadataGateway,
        tenant: str,
        ttl: float,
        maxsize: int = DEFAULT_CACHE_SIZE,
        timer: Callable[[], float] | None = None,
    ) -> None:
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        self.inner = inner
        self.tenant = tenant
        cache_kwargs: dict[str, Any] = {"maxsize": maxsize, "ttl": ttl}
        if timer is not None:
            cache_kwargs["timer"] = timer
        self._cache: TTLCache[tuple[Hashable, ...], Any] = TTLCache(**cache_kwargs)

    async def _cached(
        self, kind: str, arg: str | None, fetch: Callable[[], Awaitable[T]]
    ) -> T:
        key = (self.tenant, kind, arg)
        try:
            value = self._cache[key]
        except KeyError:
            value = await fetch()
            self._cache[key] = value
            return value
        logger.debug(f"Metadata cache hit for {kind} ({arg or '-'}) on {self.tenant}")
        return value

    def clear(self) -> None:
        self._cache.clear()

    async def list_fields(self) -> list[FieldDescriptor]:
        return list(await self._cached("fields", None, self.inner.list_fields))

    async def get_issue_types_for_project(
        self, project_key: str
    ) -> list[ProjectIssueTypes]:
        return list(
            await self._cached(
                "issue_types",
                project_key,
                lambda: self.inner.get_issue_types_for_project(project_key),
            )
        )

    async def get_transitions(self, issue_key: str) -> list[TransitionDescriptor]:
        # Depends on the issue's current status; never cached.
        return await self.inner.get_transitions(issue_key)

    async def get_editable_fields(self, issue_key: str) -> list[FieldDescriptor]:
        # Depends on the issue's current type and status; never cached.
        return await self.inner.get_editable_fields(issue_key)

    async def get_current_user(self) -> CurrentUser:
        return await self._cached("current_user", None, self.inner.get_current_user)
