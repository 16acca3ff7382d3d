"""Resolves the effective token and repository identity for a single call."""

from dataclasses import dataclass
from typing import Any

from github_issue_ops.configuration.env import EnvironmentLookup
from github_issue_ops.configuration.models import IssuesConfiguration
from github_issue_ops.utils.constants import ENV_OWNER_KEY, ENV_REPO_KEY, ENV_REPO_URL_KEY, ENV_TOKEN_KEY
from github_issue_ops.utils.github import parse_repository_url


@dataclass(frozen=True)
class RepoIdentity:
    """The owner/repo pair addressing a repository; either part may be unresolved."""

    owner: str | None
    repo: str | None

    @property
    def complete(self) -> bool:
        """Whether both owner and repo were resolved."""
        return bool(self.owner and self.repo)


def resolve_token(override: Any, configuration: IssuesConfiguration, environment: EnvironmentLookup) -> str | None:
    """Picks the first available token: call override, stored token, then the environment."""
    candidate = str(override).strip() if override else ""
    return candidate or configuration.token or environment.get(ENV_TOKEN_KEY) or None


def resolve_repository(
    owner: Any,
    repo: Any,
    configuration: IssuesConfiguration,
    environment: EnvironmentLookup,
) -> RepoIdentity:
    """Resolves owner and repo independently through the layered sources.

    Each part falls back from the call value to the stored configuration to
    the environment. Whatever is still missing is then taken from a parsed
    repository URL (stored ``repo_url``, else ``github.repoUrl``).

    The URL source is treated as absent whenever the caller passed both owner
    and repo. Callers passing only one of them still get the other part from
    the URL.
    """
    resolved_owner = owner or configuration.owner or environment.get(ENV_OWNER_KEY) or None
    resolved_repo = repo or configuration.repo or environment.get(ENV_REPO_KEY) or None

    if not resolved_owner or not resolved_repo:
        url = None if owner and repo else configuration.repo_url or environment.get(ENV_REPO_URL_KEY)
        parsed = parse_repository_url(url)
        if parsed is not None:
            resolved_owner = resolved_owner or parsed[0]
            resolved_repo = resolved_repo or parsed[1]

    return RepoIdentity(
        owner=str(resolved_owner) if resolved_owner else None,
        repo=str(resolved_repo) if resolved_repo else None,
    )
