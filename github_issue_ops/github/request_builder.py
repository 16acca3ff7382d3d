"""Builds validated REST requests for each issue operation.

Every builder runs the same pre-flight checks in the same order (token,
then owner/repo, then the operation's own required fields) and returns a
``Failure`` for the first one that does not hold. Nothing here touches the
network.

Payload fields use githubkit's ``UNSET`` sentinel to tell "not supplied"
apart from an explicit ``None``. The inclusion rules differ per field and per
operation on purpose; see ``build_create_payload`` and
``build_update_payload``.
"""

import math
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

from githubkit.typing import Missing
from githubkit.utils import UNSET

from github_issue_ops.configuration.models import IssuesConfiguration
from github_issue_ops.github.resolver import RepoIdentity
from github_issue_ops.github.results import Failure
from github_issue_ops.utils.constants import (
    ADD_COMMENT_OPERATION,
    CREATE_ISSUE_OPERATION,
    GITHUB_ACCEPT_HEADER,
    LIST_ISSUES_OPERATION,
    UPDATE_ISSUE_OPERATION,
)
from github_issue_ops.utils.text import to_text

# Characters left alone by JavaScript's encodeURIComponent, besides alphanumerics and "_.-~".
_URI_COMPONENT_SAFE = "!*'()"


@dataclass(frozen=True)
class IssueRequest:
    """A fully-built request, ready to hand to a transport."""

    operation: str
    method: str
    url: str
    headers: dict[str, str]
    payload: dict[str, Any] | None = None
    context: dict[str, Any] = field(default_factory=dict)
    expects_list: bool = False
    include_pull_requests: bool = False


def to_number(value: Any) -> float:
    """Coerces a value to a float the way a loose numeric parse would, returning NaN on failure."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


def _compact_number(value: float) -> int | float | None:
    if not math.isfinite(value):
        # NaN and infinities have no JSON representation; GitHub receives null.
        return None
    if value.is_integer():
        return int(value)
    return value


def coerce_issue_number(value: Any) -> int | float | None:
    """Returns the issue number when it is a positive finite number, otherwise None."""
    number = to_number(value)
    if not math.isfinite(number) or number <= 0:
        return None
    return _compact_number(number)


def encode_component(value: Any) -> str:
    """Percent-encodes a single URL component."""
    return quote(str(value), safe=_URI_COMPONENT_SAFE)


def build_query(params: dict[str, Any]) -> str:
    """Builds a ``?key=value`` query string, skipping None, UNSET and empty-string values."""
    parts = [
        f"{encode_component(key)}={encode_component(to_text(value))}"
        for key, value in params.items()
        if value is not UNSET and value is not None and value != ""
    ]
    return "?" + "&".join(parts) if parts else ""


def build_headers(token: str, user_agent: str) -> dict[str, str]:
    """Headers sent with every request."""
    return {
        "Authorization": f"Bearer {token}",
        "User-Agent": user_agent,
        "Accept": GITHUB_ACCEPT_HEADER,
    }


def issues_url(configuration: IssuesConfiguration, identity: RepoIdentity, *, number: int | float | None = None, suffix: str = "") -> str:
    """Builds ``<base>/repos/<owner>/<repo>/issues[/<number>][<suffix>]``."""
    url = f"{configuration.api_url}/repos/{encode_component(identity.owner)}/{encode_component(identity.repo)}/issues"
    if number is not None:
        url += f"/{number}"
    return url + suffix


def _stringify_list(values: Any) -> Any:
    if isinstance(values, (list, tuple)):
        return [to_text(value) for value in values]
    return values


def build_create_payload(
    title: str,
    body: Any = None,
    labels: Any = None,
    assignees: Any = None,
    milestone: Missing[Any] = UNSET,
) -> dict[str, Any]:
    """Serializes the fields of a new issue.

    ``body`` is only sent when it is a string, ``labels`` and ``assignees``
    only when they are non-empty lists, and ``milestone`` whenever it is not
    None.
    """
    payload: dict[str, Any] = {"title": title}
    if isinstance(body, str):
        payload["body"] = body
    if isinstance(labels, (list, tuple)) and labels:
        payload["labels"] = _stringify_list(labels)
    if isinstance(assignees, (list, tuple)) and assignees:
        payload["assignees"] = _stringify_list(assignees)
    if milestone is not UNSET and milestone is not None:
        payload["milestone"] = _compact_number(to_number(milestone))
    return payload


def build_update_payload(
    title: Missing[Any] = UNSET,
    body: Missing[Any] = UNSET,
    state: Missing[Any] = UNSET,
    labels: Missing[Any] = UNSET,
    assignees: Missing[Any] = UNSET,
    milestone: Missing[Any] = UNSET,
) -> dict[str, Any]:
    """Serializes the supplied fields of an issue update.

    Every field is optional. An explicit None for ``title`` or ``body`` is
    sent as JSON null rather than the string "null", which is how a body is
    cleared. ``state`` is dropped when falsy, while ``milestone`` is only
    dropped when None or an empty string.
    """
    payload: dict[str, Any] = {}
    if title is not UNSET:
        payload["title"] = None if title is None else to_text(title)
    if body is not UNSET:
        payload["body"] = None if body is None else to_text(body)
    if state is not UNSET and state:
        payload["state"] = state
    if labels is not UNSET:
        payload["labels"] = _stringify_list(labels)
    if assignees is not UNSET:
        payload["assignees"] = _stringify_list(assignees)
    if milestone is not UNSET and milestone is not None and milestone != "":
        payload["milestone"] = _compact_number(to_number(milestone))
    return payload


def _preflight(operation: str, token: str | None, identity: RepoIdentity) -> Failure | None:
    if not token:
        return Failure(error=f"{operation}: missing token")
    if not identity.complete:
        return Failure(error=f"{operation}: missing owner/repo")
    return None


def build_create_request(
    configuration: IssuesConfiguration,
    token: str | None,
    identity: RepoIdentity,
    *,
    title: Any,
    body: Any = None,
    labels: Any = None,
    assignees: Any = None,
    milestone: Missing[Any] = UNSET,
) -> IssueRequest | Failure:
    """Validates and builds a ``POST .../issues`` request."""
    failure = _preflight(CREATE_ISSUE_OPERATION, token, identity)
    if failure is not None:
        return failure
    trimmed_title = to_text(title or "").strip()
    if not trimmed_title:
        return Failure(error=f"{CREATE_ISSUE_OPERATION}: missing title")

    url = issues_url(configuration, identity)
    payload = build_create_payload(trimmed_title, body=body, labels=labels, assignees=assignees, milestone=milestone)
    return IssueRequest(
        operation=CREATE_ISSUE_OPERATION,
        method="POST",
        url=url,
        headers=build_headers(str(token), configuration.user_agent),
        payload=payload,
        context={
            "url": url,
            "owner": identity.owner,
            "repo": identity.repo,
            "labels": payload.get("labels"),
            "assignees": payload.get("assignees"),
            "milestone": payload.get("milestone"),
        },
    )


def build_update_request(
    configuration: IssuesConfiguration,
    token: str | None,
    identity: RepoIdentity,
    *,
    number: Any,
    title: Missing[Any] = UNSET,
    body: Missing[Any] = UNSET,
    state: Missing[Any] = UNSET,
    labels: Missing[Any] = UNSET,
    assignees: Missing[Any] = UNSET,
    milestone: Missing[Any] = UNSET,
) -> IssueRequest | Failure:
    """Validates and builds a ``PATCH .../issues/<number>`` request."""
    failure = _preflight(UPDATE_ISSUE_OPERATION, token, identity)
    if failure is not None:
        return failure
    issue_number = coerce_issue_number(number)
    if issue_number is None:
        return Failure(error=f"{UPDATE_ISSUE_OPERATION}: invalid issue number")

    url = issues_url(configuration, identity, number=issue_number)
    payload = build_update_payload(
        title=title,
        body=body,
        state=state,
        labels=labels,
        assignees=assignees,
        milestone=milestone,
    )
    return IssueRequest(
        operation=UPDATE_ISSUE_OPERATION,
        method="PATCH",
        url=url,
        headers=build_headers(str(token), configuration.user_agent),
        payload=payload,
        context={"url": url, "payload": payload},
    )


def build_comment_request(
    configuration: IssuesConfiguration,
    token: str | None,
    identity: RepoIdentity,
    *,
    number: Any,
    body: Any,
) -> IssueRequest | Failure:
    """Validates and builds a ``POST .../issues/<number>/comments`` request."""
    failure = _preflight(ADD_COMMENT_OPERATION, token, identity)
    if failure is not None:
        return failure
    issue_number = coerce_issue_number(number)
    if issue_number is None:
        return Failure(error=f"{ADD_COMMENT_OPERATION}: invalid issue number")
    if not isinstance(body, str) or not body.strip():
        return Failure(error=f"{ADD_COMMENT_OPERATION}: body is required")

    url = issues_url(configuration, identity, number=issue_number, suffix="/comments")
    return IssueRequest(
        operation=ADD_COMMENT_OPERATION,
        method="POST",
        url=url,
        headers=build_headers(str(token), configuration.user_agent),
        payload={"body": body},
        context={"url": url},
    )


def build_list_request(
    configuration: IssuesConfiguration,
    token: str | None,
    identity: RepoIdentity,
    *,
    state: Any = None,
    labels: Any = None,
    page: Any = None,
    per_page: Any = None,
    since: Any = None,
    sort: Any = None,
    direction: Any = None,
    include_pull_requests: Any = False,
) -> IssueRequest | Failure:
    """Validates and builds a single-page ``GET .../issues`` request."""
    failure = _preflight(LIST_ISSUES_OPERATION, token, identity)
    if failure is not None:
        return failure

    query = build_query(
        {
            "state": state,
            "labels": ",".join(to_text(label) for label in labels) if isinstance(labels, (list, tuple)) else labels,
            "page": page,
            "per_page": per_page,
            "since": since,
            "sort": sort,
            "direction": direction,
        }
    )
    url = issues_url(configuration, identity) + query
    return IssueRequest(
        operation=LIST_ISSUES_OPERATION,
        method="GET",
        url=url,
        headers=build_headers(str(token), configuration.user_agent),
        context={"url": url, "owner": identity.owner, "repo": identity.repo},
        expects_list=True,
        include_pull_requests=bool(include_pull_requests),
    )
