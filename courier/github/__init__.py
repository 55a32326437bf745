"""GitHub REST client and configuration."""

from __future__ import annotations

from .client import ContentSource, GitHubRestClient, IssueCommenter
from .config import GitHubConfig
from .errors import GitHubAPIError, GitHubConfigError

__all__ = [
    "ContentSource",
    "GitHubAPIError",
    "GitHubConfig",
    "GitHubConfigError",
    "GitHubRestClient",
    "IssueCommenter",
]
