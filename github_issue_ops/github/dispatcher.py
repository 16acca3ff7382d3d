"""Sends built requests and normalizes every outcome into a Result."""

from typing import Any

import structlog

from github_issue_ops.github.abc import IssueTransportBase, TransportResponse
from github_issue_ops.github.request_builder import IssueRequest
from github_issue_ops.github.results import Failure, FailureDetails, Result, Success
from github_issue_ops.utils.constants import CREATE_ISSUE_OPERATION

logger = structlog.get_logger("github")


def _exception_message(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__ or "unknown"


def _is_pull_request(item: Any) -> bool:
    if not isinstance(item, dict):
        return False
    marker = item.get("pull_request")
    # An empty object still marks a pull request.
    return isinstance(marker, (dict, list)) or bool(marker)


def filter_pull_requests(items: Any, include_pull_requests: bool) -> list[Any]:
    """Drops pull requests from an issue listing unless asked to keep them.

    Anything that is not a list is treated as an empty listing.
    """
    if not isinstance(items, list):
        return []
    if include_pull_requests:
        return items
    return [item for item in items if not _is_pull_request(item)]


def normalize_response(request: IssueRequest, response: TransportResponse) -> Result:
    """Maps a transport response onto Success or Failure by status range."""
    status, json_body, raw = response.status, response.json, response.raw

    if 200 <= status < 300:
        if request.expects_list:
            return Success(data=filter_pull_requests(json_body, request.include_pull_requests))
        if request.operation == CREATE_ISSUE_OPERATION:
            issue = json_body if isinstance(json_body, dict) else {}
            logger.info("Created GitHub issue", operation=request.operation, status=status, number=issue.get("number"), html_url=issue.get("html_url"))
        return Success(data=json_body if json_body is not None else raw)

    details = FailureDetails(status=status, body=raw, request=request.context)
    logger.error("GitHub request failed", operation=request.operation, status=status, body=raw, request=request.context)
    return Failure(error=raw or f"{request.operation}: unexpected status {status}", details=details)


async def dispatch(transport: IssueTransportBase, request: IssueRequest) -> Result:
    """Sends one request through the transport; never raises."""
    try:
        response = await transport.send(request)
    except Exception as exc:
        logger.error("GitHub request raised", operation=request.operation, error=_exception_message(exc), error_type=type(exc).__name__)
        return Failure(error=_exception_message(exc))
    return normalize_response(request, response)
