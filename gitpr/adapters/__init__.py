"""Git platform adapters."""

from gitpr.adapters.base import GitPlatformAdapter, GitPlatformError
from gitpr.adapters.github import GitHubAdapter

__all__ = ["GitPlatformAdapter", "GitPlatformError", "GitHubAdapter"]
