"""Shared constants used across the application."""

# This file is intended to hold shared constants.

import re

# GitHub API Constants
# --------------------

DEFAULT_GITHUB_API_URL = "https://api.github.com"
"""Default REST API base URL (override for GitHub Enterprise Server)."""

DEFAULT_USER_AGENT = "github-issue-ops/1.0"
"""User-Agent header sent with every request unless configured otherwise."""

GITHUB_ACCEPT_HEADER = "application/vnd.github+json"
"""Media type requested from the REST API."""

# Regex Patterns
REPOSITORY_URL_PATTERN = re.compile(r"github\.com[:/]([^/]+)/([^/]+)$", re.IGNORECASE)
"""Pattern to match the trailing owner/repo segment of HTTPS or SSH repository URLs."""

# Environment Lookup Keys
# -----------------------

ENV_TOKEN_KEY = "github.token"
ENV_OWNER_KEY = "github.owner"
ENV_REPO_KEY = "github.repo"
ENV_REPO_URL_KEY = "github.repoUrl"

# Operation Names
# ---------------

CREATE_ISSUE_OPERATION = "github.createIssue"
UPDATE_ISSUE_OPERATION = "github.updateIssue"
ADD_COMMENT_OPERATION = "github.addComment"
LIST_ISSUES_OPERATION = "github.listIssues"
