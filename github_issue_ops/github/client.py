# This file is intended to hold the setup for the githubkit-backed transport.

"""Sends issue requests through an unauthenticated githubkit client."""

from typing import Any

import structlog
from githubkit import GitHub, Response
from githubkit.exception import RequestFailed

from github_issue_ops.github.abc import IssueTransportBase, TransportResponse
from github_issue_ops.github.request_builder import IssueRequest

logger = structlog.get_logger(__name__)


def get_github_client() -> GitHub[Any]:
    """Returns a githubkit client that leaves authentication to the request headers.

    Caching and automatic retries are disabled so each call maps to exactly
    one HTTP request.
    """
    return GitHub(http_cache=False, auto_retry=False)


def _parse_json(response: Response[Any]) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def to_transport_response(response: Response[Any]) -> TransportResponse:
    """Normalizes a githubkit response into a TransportResponse."""
    return TransportResponse(status=response.status_code, json=_parse_json(response), raw=response.text)


class GitHubKitTransport(IssueTransportBase):
    """Transport built on githubkit's async request API."""

    async def send(self, request: IssueRequest) -> TransportResponse:
        """Send the request, turning HTTP error statuses into responses instead of exceptions."""
        logger.debug("Sending GitHub request", operation=request.operation, method=request.method, url=request.url)
        kwargs: dict[str, Any] = {"headers": request.headers}
        if request.method != "GET" and request.payload is not None:
            kwargs["json"] = request.payload

        async with get_github_client() as github:
            try:
                response = await github.arequest(request.method, request.url, **kwargs)
            except RequestFailed as exc:
                return to_transport_response(exc.response)
        return to_transport_response(response)
