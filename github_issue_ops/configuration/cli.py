"""Defines the Command Line Interface (CLI) using Typer."""

import asyncio
import json
import logging
import sys
from typing import Any

import structlog
import typer
from dotenv import load_dotenv
from githubkit.utils import UNSET
from typer import Argument, Option
from typing_extensions import Annotated

from github_issue_ops.github.adapter import IssuesClient
from github_issue_ops.github.client import GitHubKitTransport
from github_issue_ops.github.results import Result

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False)


def configure_logging(debug: bool) -> None:
    """Send structlog output to stderr so stdout only carries results."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if debug else logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def _unset_if_none(value: Any) -> Any:
    return UNSET if value is None else value


def _emit(result: Result) -> None:
    """Print the result as JSON and exit non-zero on failure."""
    typer.echo(json.dumps(result.to_dict(), indent=2, default=str))
    if not result.ok:
        raise typer.Exit(1)


@typer_app.callback()
def main_callback(
    ctx: typer.Context,
    token: Annotated[str | None, Option(help="GitHub token. Falls back to GITHUB_TOKEN.")] = None,
    owner: Annotated[str | None, Option(help="Repository owner. Falls back to GITHUB_OWNER.")] = None,
    repo: Annotated[str | None, Option(help="Repository name. Falls back to GITHUB_REPO.")] = None,
    repo_url: Annotated[str | None, Option(help="Repository URL to take owner/repo from. Falls back to GITHUB_REPO_URL.")] = None,
    base_url: Annotated[str | None, Option(envvar="GITHUB_API_URL", help="GitHub API URL.")] = None,
    user_agent: Annotated[str | None, Option(help="User-Agent header to send.")] = None,
    debug: Annotated[bool, Option(envvar="DEBUG", help="Enable debug mode.")] = False,
) -> None:
    """Manage GitHub issues from the command line."""
    configure_logging(debug)
    client = IssuesClient(transport=GitHubKitTransport())
    client.configure(
        token=token,
        owner=owner,
        repo=repo,
        repo_url=repo_url,
        base_url=base_url,
        user_agent=user_agent,
    )
    ctx.obj = {"client": client}


@typer_app.command(name="create-issue")
def create_issue_cli(
    ctx: typer.Context,
    title: Annotated[str, Option(help="Issue title.")],
    body: Annotated[str | None, Option(help="Issue body.")] = None,
    label: Annotated[list[str] | None, Option(help="Label to apply. Repeat for several labels.")] = None,
    assignee: Annotated[list[str] | None, Option(help="User to assign. Repeat for several assignees.")] = None,
    milestone: Annotated[int | None, Option(help="Milestone number.")] = None,
) -> None:
    """Create a new issue."""
    client: IssuesClient = ctx.obj["client"]
    result = asyncio.run(client.create_issue(title=title, body=body, labels=label, assignees=assignee, milestone=milestone))
    _emit(result)


@typer_app.command(name="update-issue")
def update_issue_cli(
    ctx: typer.Context,
    number: Annotated[int, Argument(help="Issue number.")],
    title: Annotated[str | None, Option(help="New title.")] = None,
    body: Annotated[str | None, Option(help="New body.")] = None,
    clear_body: Annotated[bool, Option(help="Remove the issue body.")] = False,
    state: Annotated[str | None, Option(help="New state (open or closed).")] = None,
    label: Annotated[list[str] | None, Option(help="Replace labels. Repeat for several labels.")] = None,
    assignee: Annotated[list[str] | None, Option(help="Replace assignees. Repeat for several assignees.")] = None,
    milestone: Annotated[int | None, Option(help="Milestone number.")] = None,
) -> None:
    """Update fields of an existing issue. Only the options given are sent."""
    client: IssuesClient = ctx.obj["client"]
    result = asyncio.run(
        client.update_issue(
            number=number,
            title=_unset_if_none(title),
            body=None if clear_body else _unset_if_none(body),
            state=_unset_if_none(state),
            labels=_unset_if_none(label or None),
            assignees=_unset_if_none(assignee or None),
            milestone=_unset_if_none(milestone),
        )
    )
    _emit(result)


@typer_app.command(name="close-issue")
def close_issue_cli(
    ctx: typer.Context,
    number: Annotated[int, Argument(help="Issue number.")],
) -> None:
    """Close an issue."""
    client: IssuesClient = ctx.obj["client"]
    _emit(asyncio.run(client.close_issue(number=number)))


@typer_app.command(name="add-comment")
def add_comment_cli(
    ctx: typer.Context,
    number: Annotated[int, Argument(help="Issue number.")],
    body: Annotated[str, Option(help="Comment text.")],
) -> None:
    """Post a comment on an issue."""
    client: IssuesClient = ctx.obj["client"]
    _emit(asyncio.run(client.add_comment(number=number, body=body)))


@typer_app.command(name="list-issues")
def list_issues_cli(
    ctx: typer.Context,
    state: Annotated[str | None, Option(help="Filter issues by state (open, closed, all).")] = None,
    label: Annotated[list[str] | None, Option(help="Filter by label. Repeat for several labels.")] = None,
    page: Annotated[int | None, Option(help="Page number.")] = None,
    per_page: Annotated[int | None, Option(help="Results per page.")] = None,
    since: Annotated[str | None, Option(help="Only issues updated at or after this ISO 8601 timestamp.")] = None,
    sort: Annotated[str | None, Option(help="Sort by created, updated or comments.")] = None,
    direction: Annotated[str | None, Option(help="Sort direction (asc or desc).")] = None,
    include_pull_requests: Annotated[bool, Option(help="Keep pull requests in the listing.")] = False,
) -> None:
    """List one page of issues."""
    client: IssuesClient = ctx.obj["client"]
    result = asyncio.run(
        client.list_issues(
            state=state,
            labels=label,
            page=page,
            per_page=per_page,
            since=since,
            sort=sort,
            direction=direction,
            include_pull_requests=include_pull_requests,
        )
    )
    _emit(result)


def main() -> None:
    """Entry point for the ``github-issue-ops`` console script."""
    typer_app()


if __name__ == "__main__":
    main()
