"""Models for the stored client configuration and how configure calls merge into it."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from github_issue_ops.utils.constants import DEFAULT_GITHUB_API_URL, DEFAULT_USER_AGENT
from github_issue_ops.utils.text import to_text

# camelCase spellings are accepted alongside the field names.
_OPTION_ALIASES: dict[str, str] = {
    "repoUrl": "repo_url",
    "baseUrl": "base_url",
    "userAgent": "user_agent",
}


class IssuesConfiguration(BaseModel):
    """Defaults shared by every operation issued through a client."""

    model_config = ConfigDict(frozen=True)

    token: str | None = None
    owner: str | None = None
    repo: str | None = None
    repo_url: str | None = None
    base_url: str = DEFAULT_GITHUB_API_URL
    user_agent: str = DEFAULT_USER_AGENT

    @property
    def api_url(self) -> str:
        """Base URL without a trailing slash."""
        return self.base_url.removesuffix("/")


def _normalize_option(field: str, value: Any) -> str:
    text = to_text(value).strip()
    if field == "base_url":
        text = text.removesuffix("/")
    return text


def merge_configuration(current: IssuesConfiguration, options: Any) -> IssuesConfiguration:
    """Returns a copy of ``current`` with the truthy options from ``options`` applied.

    Only recognized keys whose value is non-empty after string coercion and
    trimming overwrite the stored field. Missing or falsy values leave the
    stored field untouched, so a field can never be cleared this way.
    Anything other than a mapping is ignored.
    """
    if not isinstance(options, Mapping):
        return current

    updates: dict[str, str] = {}
    for key, value in options.items():
        field = _OPTION_ALIASES.get(key, key)
        if field not in IssuesConfiguration.model_fields or not value:
            continue
        normalized = _normalize_option(field, value)
        if normalized:
            updates[field] = normalized

    if not updates:
        return current
    return current.model_copy(update=updates)
