"""Helpers for creating, updating, closing and listing GitHub issues and posting comments.

The module-level functions share one process-wide ``IssuesClient``. Values
passed to ``configure`` therefore apply to every later call until overridden
per call::

    import github_issue_ops

    github_issue_ops.configure(token="...", repo_url="https://github.com/acme/widget")
    result = await github_issue_ops.create_issue(title="Broken build")
    if result.ok:
        print(result.data["html_url"])
"""

from typing import Any

from github_issue_ops.configuration.models import IssuesConfiguration
from github_issue_ops.github.adapter import IssuesClient
from github_issue_ops.github.results import Failure, FailureDetails, Result, Success

__version__ = "0.1.0"

default_client = IssuesClient()


def configure(options: Any = None, /, **kwargs: Any) -> None:
    """Merge options into the shared configuration."""
    default_client.configure(options, **kwargs)


async def create_issue(**kwargs: Any) -> Result:
    """Create an issue using the shared client."""
    return await default_client.create_issue(**kwargs)


async def update_issue(**kwargs: Any) -> Result:
    """Update an issue using the shared client."""
    return await default_client.update_issue(**kwargs)


async def close_issue(**kwargs: Any) -> Result:
    """Close an issue using the shared client."""
    return await default_client.close_issue(**kwargs)


async def add_comment(**kwargs: Any) -> Result:
    """Comment on an issue using the shared client."""
    return await default_client.add_comment(**kwargs)


async def list_issues(**kwargs: Any) -> Result:
    """List one page of issues using the shared client."""
    return await default_client.list_issues(**kwargs)


__all__ = [
    "Failure",
    "FailureDetails",
    "IssuesClient",
    "IssuesConfiguration",
    "Result",
    "Success",
    "__version__",
    "add_comment",
    "close_issue",
    "configure",
    "create_issue",
    "default_client",
    "list_issues",
    "update_issue",
]
