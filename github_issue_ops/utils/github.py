"""Contains utility functions for GitHub interactions."""

from typing import Any

from github_issue_ops.utils.constants import REPOSITORY_URL_PATTERN


def parse_repository_url(url: Any) -> tuple[str, str] | None:
    """Parses the owner and repository out of a GitHub repository URL.

    Accepts both HTTPS (``https://github.com/owner/repo``) and SSH
    (``git@github.com:owner/repo.git``) forms. Returns None when the value is
    not a string or does not look like a GitHub repository URL.
    """
    if not url or not isinstance(url, str):
        return None
    cleaned = url.strip().removesuffix(".git")
    match = REPOSITORY_URL_PATTERN.search(cleaned)
    if match is None or not match.group(1) or not match.group(2):
        return None
    return match.group(1), match.group(2)
