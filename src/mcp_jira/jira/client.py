"""Base client module for Jira API interactions."""

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from atlassian import Jira

from ..models.jira import NotFound, ResolutionResult
from .cache import CachedMetadataGateway
from .config import JiraConfig
from .gateway import JiraMetadataGateway, MetadataGateway, call_jira
from .resolvers import (
    AssigneeResolver,
    EditableFieldSelector,
    FieldNameResolver,
    IssueTypeResolver,
    TransitionResolver,
)

# Configure logging
logger = logging.getLogger("mcp-jira")

T = TypeVar("T")


def build_gateway(jira: Jira, config: JiraConfig) -> MetadataGateway:
    """Create the metadata gateway, wrapped in a TTL cache when configured."""
    gateway: MetadataGateway = JiraMetadataGateway(jira)
    if config.metadata_cache_ttl > 0:
        logger.debug(
            f"Metadata cache enabled for {config.tenant} "
            f"(ttl={config.metadata_cache_ttl}s)"
        )
        gateway = CachedMetadataGateway(
            gateway, tenant=config.tenant, ttl=config.metadata_cache_ttl
        )
    return gateway


def require_resolved(result: ResolutionResult | NotFound) -> ResolutionResult:
    """Return ``result`` or raise ValueError carrying the NotFound diagnostic."""
    if isinstance(result, NotFound):
        raise ValueError(result.message())
    return result


class JiraClient:
    """Base client for Jira API interactions."""

    def __init__(
        self,
        config: JiraConfig | None = None,
        jira: Jira | None = None,
        gateway: MetadataGateway | None = None,
    ) -> None:
        """Initialize the Jira client with a given configuration.

        Args:
            config: Jira configuration object. If None, will be loaded from environment variables.
            jira: Preconfigured ``atlassian.Jira`` instance, built from ``config`` if None.
            gateway: Metadata gateway used by the resolvers, built from ``jira`` if None.

        Raises:
            ValueError: If configuration is invalid.
        """
        if config is None:
            self.config = JiraConfig.from_env()
        else:
            self.config = config

        if jira is not None:
            self.jira = jira
        # Initialize the Jira client based on auth type
        elif self.config.auth_type == "token":
            self.jira = Jira(
                url=self.config.url,
                token=self.config.personal_token,
                cloud=self.config.is_cloud,
                verify_ssl=self.config.ssl_verify,
            )
        else:  # basic auth
            self.jira = Jira(
                url=self.config.url,
                username=self.config.username,
                password=self.config.api_token,
                cloud=self.config.is_cloud,
                verify_ssl=self.config.ssl_verify,
            )

        self.gateway = gateway or build_gateway(self.jira, self.config)

        self.field_resolver = FieldNameResolver(self.gateway)
        self.editable_field_selector = EditableFieldSelector(self.gateway)
        self.issue_type_resolver = IssueTypeResolver(self.gateway)
        self.transition_resolver = TransitionResolver(self.gateway)
        self.assignee_resolver = AssigneeResolver(self.gateway)

    async def _call(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run a mutation or query on the underlying client off the event loop."""
        return await call_jira(func, *args, **kwargs)
