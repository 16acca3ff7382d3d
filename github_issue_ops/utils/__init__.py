"""Utility modules for shared functionality."""

from .constants import (
    DEFAULT_GITHUB_API_URL,
    DEFAULT_USER_AGENT,
    GITHUB_ACCEPT_HEADER,
    REPOSITORY_URL_PATTERN,
)
from .github import parse_repository_url
from .text import to_text

__all__ = [
    "DEFAULT_GITHUB_API_URL",
    "DEFAULT_USER_AGENT",
    "GITHUB_ACCEPT_HEADER",
    "REPOSITORY_URL_PATTERN",
    "parse_repository_url",
    "to_text",
]
