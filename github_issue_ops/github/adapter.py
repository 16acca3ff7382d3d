"""Issue operations client tying configuration, resolution, request building and dispatch together."""

from collections.abc import Mapping
from typing import Any

import structlog
from githubkit.typing import Missing
from githubkit.utils import UNSET

from github_issue_ops.configuration.env import EnvironmentLookup, SettingsEnvironment
from github_issue_ops.configuration.models import IssuesConfiguration, merge_configuration
from github_issue_ops.github.abc import IssueTransportBase
from github_issue_ops.github.dispatcher import dispatch
from github_issue_ops.github.request_builder import (
    IssueRequest,
    build_comment_request,
    build_create_request,
    build_list_request,
    build_update_request,
)
from github_issue_ops.github.resolver import RepoIdentity, resolve_repository, resolve_token
from github_issue_ops.github.results import Failure, Result

from .client import GitHubKitTransport

logger = structlog.get_logger(__name__)


class IssuesClient:
    """Creates, updates, closes and lists issues and posts comments.

    Every operation takes keyword arguments only and returns a ``Success`` or
    ``Failure``; none of them raise. ``owner``, ``repo`` and ``token`` may be
    passed per call, otherwise they come from the client's configuration, the
    environment, or the configured repository URL.
    """

    def __init__(
        self,
        configuration: IssuesConfiguration | None = None,
        transport: IssueTransportBase | None = None,
        environment: EnvironmentLookup | None = None,
    ) -> None:
        """Initialize the client with optional configuration, transport and environment lookup."""
        self.configuration = configuration or IssuesConfiguration()
        self.transport = transport or GitHubKitTransport()
        self.environment = environment if environment is not None else SettingsEnvironment()

    def configure(self, options: Any = None, /, **kwargs: Any) -> None:
        """Merge options into the stored configuration; falsy values are ignored."""
        if kwargs and options is None:
            options = kwargs
        elif kwargs and isinstance(options, Mapping):
            options = {**options, **kwargs}
        self.configuration = merge_configuration(self.configuration, options)
        logger.debug(
            "Updated GitHub issues configuration",
            owner=self.configuration.owner,
            repo=self.configuration.repo,
            repo_url=self.configuration.repo_url,
            base_url=self.configuration.base_url,
        )

    def _resolve(self, owner: Any, repo: Any, token: Any) -> tuple[str | None, RepoIdentity]:
        configuration = self.configuration
        return (
            resolve_token(token, configuration, self.environment),
            resolve_repository(owner, repo, configuration, self.environment),
        )

    async def _send(self, request: IssueRequest | Failure) -> Result:
        if isinstance(request, Failure):
            logger.debug("Rejected GitHub request before sending", error=request.error)
            return request
        return await dispatch(self.transport, request)

    async def create_issue(
        self,
        *,
        title: Any = None,
        body: Any = None,
        labels: Any = None,
        assignees: Any = None,
        milestone: Any = None,
        owner: Any = None,
        repo: Any = None,
        token: Any = None,
    ) -> Result:
        """Create an issue."""
        auth_token, identity = self._resolve(owner, repo, token)
        request = build_create_request(
            self.configuration,
            auth_token,
            identity,
            title=title,
            body=body,
            labels=labels,
            assignees=assignees,
            milestone=milestone,
        )
        return await self._send(request)

    async def update_issue(
        self,
        *,
        number: Any = None,
        title: Missing[Any] = UNSET,
        body: Missing[Any] = UNSET,
        state: Missing[Any] = UNSET,
        labels: Missing[Any] = UNSET,
        assignees: Missing[Any] = UNSET,
        milestone: Missing[Any] = UNSET,
        owner: Any = None,
        repo: Any = None,
        token: Any = None,
    ) -> Result:
        """Update an issue; only the fields passed are sent, and ``body=None`` clears the body."""
        auth_token, identity = self._resolve(owner, repo, token)
        request = build_update_request(
            self.configuration,
            auth_token,
            identity,
            number=number,
            title=title,
            body=body,
            state=state,
            labels=labels,
            assignees=assignees,
            milestone=milestone,
        )
        return await self._send(request)

    async def close_issue(self, **kwargs: Any) -> Result:
        """Close an issue; any other update fields are passed through unchanged."""
        return await self.update_issue(**{**kwargs, "state": "closed"})

    async def add_comment(
        self,
        *,
        number: Any = None,
        body: Any = None,
        owner: Any = None,
        repo: Any = None,
        token: Any = None,
    ) -> Result:
        """Post a comment on an issue."""
        auth_token, identity = self._resolve(owner, repo, token)
        request = build_comment_request(self.configuration, auth_token, identity, number=number, body=body)
        return await self._send(request)

    async def list_issues(
        self,
        *,
        state: Any = None,
        labels: Any = None,
        page: Any = None,
        per_page: Any = None,
        since: Any = None,
        sort: Any = None,
        direction: Any = None,
        include_pull_requests: Any = False,
        owner: Any = None,
        repo: Any = None,
        token: Any = None,
    ) -> Result:
        """List one page of issues, leaving out pull requests unless ``include_pull_requests`` is set."""
        auth_token, identity = self._resolve(owner, repo, token)
        request = build_list_request(
            self.configuration,
            auth_token,
            identity,
            state=state,
            labels=labels,
            page=page,
            per_page=per_page,
            since=since,
            sort=sort,
            direction=direction,
            include_pull_requests=include_pull_requests,
        )
        return await self._send(request)
