"""Unit tests for the IssuesClient class and its issue operations."""

from typing import Any, Callable

import pytest

from github_issue_ops.configuration.models import IssuesConfiguration
from github_issue_ops.github.abc import TransportResponse
from github_issue_ops.github.adapter import IssuesClient
from github_issue_ops.github.results import Failure, Success


@pytest.mark.asyncio
async def test_create_issue_success(make_transport: Callable[..., Any], configuration: IssuesConfiguration) -> None:
    """Test that a created issue comes back as data."""
    body = {"number": 123, "html_url": "https://github.com/octocat/Hello-World/issues/123"}
    transport = make_transport(TransportResponse(status=201, json=body, raw="{}"))
    client = IssuesClient(configuration=configuration, transport=transport, environment={})

    result = await client.create_issue(title="Hello", body="World", labels=["bug"])

    assert result == Success(data=body)
    request = transport.requests[0]
    assert request.method == "POST"
    assert request.url == "http://api.test/repos/octocat/Hello-World/issues"
    assert request.headers["Authorization"] == "Bearer test-token"
    assert request.payload == {"title": "Hello", "body": "World", "labels": ["bug"]}


@pytest.mark.asyncio
async def test_create_issue_blank_title_makes_no_call(client: IssuesClient, transport: Any) -> None:
    """Test that a blank title fails before any request is sent."""
    result = await client.create_issue(title="  ")

    assert result == Failure(error="github.createIssue: missing title")
    assert transport.requests == []


@pytest.mark.asyncio
async def test_create_issue_missing_token(transport: Any) -> None:
    """Test that an operation without any token source fails."""
    client = IssuesClient(configuration=IssuesConfiguration(owner="o", repo="r"), transport=transport, environment={})

    result = await client.create_issue(title="Hello")

    assert result == Failure(error="github.createIssue: missing token")
    assert transport.requests == []


@pytest.mark.asyncio
async def test_missing_owner_repo(transport: Any) -> None:
    """Test that an unresolvable repository fails."""
    client = IssuesClient(configuration=IssuesConfiguration(token="t"), transport=transport, environment={})

    result = await client.list_issues()

    assert result == Failure(error="github.listIssues: missing owner/repo")


@pytest.mark.asyncio
@pytest.mark.parametrize("number", [0, "abc", 10**400])
async def test_update_issue_invalid_number(client: IssuesClient, transport: Any, number: object) -> None:
    """Test that zero and non-numeric issue numbers are rejected."""
    result = await client.update_issue(number=number, title="x")

    assert result == Failure(error="github.updateIssue: invalid issue number")
    assert transport.requests == []


@pytest.mark.asyncio
async def test_update_issue_sends_only_supplied_fields(client: IssuesClient, transport: Any) -> None:
    """Test that fields not passed are left out of the payload."""
    await client.update_issue(number=4, body=None, milestone="")

    request = transport.requests[0]
    assert request.method == "PATCH"
    assert request.url == "http://api.test/repos/octocat/Hello-World/issues/4"
    assert request.payload == {"body": None}


@pytest.mark.asyncio
async def test_close_issue_matches_update_with_closed_state(configuration: IssuesConfiguration, make_transport: Callable[..., Any]) -> None:
    """Test that closing sends exactly what an update to state closed sends."""
    close_transport = make_transport()
    update_transport = make_transport()
    closer = IssuesClient(configuration=configuration, transport=close_transport, environment={})
    updater = IssuesClient(configuration=configuration, transport=update_transport, environment={})

    await closer.close_issue(number=5)
    await updater.update_issue(number=5, state="closed")

    assert close_transport.requests == update_transport.requests
    assert close_transport.requests[0].payload == {"state": "closed"}


@pytest.mark.asyncio
async def test_close_issue_overrides_state_and_passes_fields(client: IssuesClient, transport: Any) -> None:
    """Test that close forces the state and keeps the other fields."""
    await client.close_issue(number=5, state="open", title="Done")

    assert transport.requests[0].payload == {"title": "Done", "state": "closed"}


@pytest.mark.asyncio
async def test_close_issue_invalid_number_reports_update(client: IssuesClient) -> None:
    """Test that close reports validation errors under the update operation."""
    result = await client.close_issue(number=-1)

    assert result == Failure(error="github.updateIssue: invalid issue number")


@pytest.mark.asyncio
async def test_add_comment(client: IssuesClient, transport: Any) -> None:
    """Test that a comment is posted to the issue's comments endpoint."""
    result = await client.add_comment(number="9", body="Looks good")

    assert result.ok is True
    request = transport.requests[0]
    assert request.url == "http://api.test/repos/octocat/Hello-World/issues/9/comments"
    assert request.payload == {"body": "Looks good"}


@pytest.mark.asyncio
async def test_add_comment_requires_body(client: IssuesClient) -> None:
    """Test that a blank comment body is rejected."""
    result = await client.add_comment(number=9, body=" ")

    assert result == Failure(error="github.addComment: body is required")


@pytest.mark.asyncio
async def test_list_issues_filters_pull_requests(configuration: IssuesConfiguration, make_transport: Callable[..., Any]) -> None:
    """Test that pull requests are dropped from listings by default."""
    items = [{"number": 1, "pull_request": {"url": "u"}}, {"number": 2}]
    transport = make_transport(TransportResponse(status=200, json=items, raw="[]"))
    client = IssuesClient(configuration=configuration, transport=transport, environment={})

    result = await client.list_issues(state="open", labels=["bug"])

    assert result == Success(data=[{"number": 2}])
    assert transport.requests[0].url == "http://api.test/repos/octocat/Hello-World/issues?state=open&labels=bug"
    assert transport.requests[0].payload is None


@pytest.mark.asyncio
async def test_list_issues_can_include_pull_requests(configuration: IssuesConfiguration, make_transport: Callable[..., Any]) -> None:
    """Test that pull requests are kept when asked for."""
    items = [{"number": 1, "pull_request": {"url": "u"}}, {"number": 2}]
    transport = make_transport(TransportResponse(status=200, json=items, raw="[]"))
    client = IssuesClient(configuration=configuration, transport=transport, environment={})

    result = await client.list_issues(include_pull_requests=True)

    assert result == Success(data=items)


@pytest.mark.asyncio
async def test_not_found_failure(configuration: IssuesConfiguration, make_transport: Callable[..., Any]) -> None:
    """Test that a 404 becomes a failure with details."""
    transport = make_transport(TransportResponse(status=404, json=None, raw=""))
    client = IssuesClient(configuration=configuration, transport=transport, environment={})

    result = await client.update_issue(number=1, state="closed")

    assert isinstance(result, Failure)
    assert result.error == "github.updateIssue: unexpected status 404"
    assert result.details is not None
    assert result.details.status == 404


@pytest.mark.asyncio
async def test_transport_error_never_raises(configuration: IssuesConfiguration, make_transport: Callable[..., Any]) -> None:
    """Test that transport exceptions come back as failures."""
    transport = make_transport(error=RuntimeError("boom"))
    client = IssuesClient(configuration=configuration, transport=transport, environment={})

    result = await client.add_comment(number=1, body="hi")

    assert result == Failure(error="boom")


@pytest.mark.asyncio
async def test_call_level_overrides(client: IssuesClient, transport: Any) -> None:
    """Test that per-call owner, repo and token take precedence."""
    await client.create_issue(title="Hello", owner="a", repo="b", token=" other ")

    request = transport.requests[0]
    assert request.url == "http://api.test/repos/a/b/issues"
    assert request.headers["Authorization"] == "Bearer other"


@pytest.mark.asyncio
async def test_repository_from_configured_url(transport: Any) -> None:
    """Test that owner and repo fall back to the configured repository URL."""
    client = IssuesClient(transport=transport, environment={"github.token": "env-token"})
    client.configure(repo_url="https://github.com/acme/widget.git", base_url="http://api/")

    await client.list_issues()

    request = transport.requests[0]
    assert request.url == "http://api/repos/acme/widget/issues"
    assert request.headers["Authorization"] == "Bearer env-token"


def test_configure_accepts_mapping_and_keywords(transport: Any) -> None:
    """Test that configure merges a mapping, keywords, or both."""
    client = IssuesClient(transport=transport, environment={})

    client.configure({"token": "t", "userAgent": "agent"})
    client.configure(owner="acme")
    client.configure({"repo": "widget"}, owner="other")

    assert client.configuration.token == "t"
    assert client.configuration.user_agent == "agent"
    assert client.configuration.owner == "other"
    assert client.configuration.repo == "widget"


def test_configure_ignores_non_mapping(transport: Any) -> None:
    """Test that non-mapping input leaves the configuration unchanged."""
    client = IssuesClient(configuration=IssuesConfiguration(token="t"), transport=transport, environment={})

    client.configure("token")

    assert client.configuration == IssuesConfiguration(token="t")


@pytest.mark.asyncio
async def test_configured_values_persist_across_calls(transport: Any) -> None:
    """Test that configured values apply to later calls until overridden."""
    client = IssuesClient(transport=transport, environment={})
    client.configure(token="t", owner="acme", repo="widget", user_agent="agent/2")

    await client.create_issue(title="One")
    await client.create_issue(title="Two", repo="gadget")
    await client.create_issue(title="Three")

    urls = [request.url for request in transport.requests]
    assert urls == [
        "https://api.github.com/repos/acme/widget/issues",
        "https://api.github.com/repos/acme/gadget/issues",
        "https://api.github.com/repos/acme/widget/issues",
    ]
    assert all(request.headers["User-Agent"] == "agent/2" for request in transport.requests)


@pytest.mark.asyncio
async def test_create_issue_huge_milestone_sends_null(client: IssuesClient, transport: Any) -> None:
    """Test that an out-of-range milestone is sent as null instead of raising."""
    result = await client.create_issue(title="t", milestone=10**400)

    assert result.ok is True
    assert transport.requests[0].payload == {"title": "t", "milestone": None}
