"""Pydantic Settings model for environment-backed configuration lookups."""

from typing import Protocol

from pydantic_settings import BaseSettings, SettingsConfigDict

from github_issue_ops.utils.constants import ENV_OWNER_KEY, ENV_REPO_KEY, ENV_REPO_URL_KEY, ENV_TOKEN_KEY


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # GitHub API settings
    GITHUB_TOKEN: str | None = None
    GITHUB_OWNER: str | None = None
    GITHUB_REPO: str | None = None
    GITHUB_REPO_URL: str | None = None


class EnvironmentLookup(Protocol):
    """Anything with a dict-style ``get``; plain dicts qualify."""

    def get(self, key: str, /) -> str | None: ...


_LOOKUP_KEYS: dict[str, str] = {
    ENV_TOKEN_KEY: "GITHUB_TOKEN",
    ENV_OWNER_KEY: "GITHUB_OWNER",
    ENV_REPO_KEY: "GITHUB_REPO",
    ENV_REPO_URL_KEY: "GITHUB_REPO_URL",
}


class SettingsEnvironment:
    """Key/value lookup over the environment using dotted keys such as ``github.token``.

    Settings are re-read on every lookup so that changes to the process
    environment are visible to subsequent calls.
    """

    def get(self, key: str) -> str | None:
        """Return the environment value for a dotted key, or None when unset or unknown."""
        field = _LOOKUP_KEYS.get(key)
        if field is None:
            return None
        value = getattr(Settings(), field)
        return value or None
