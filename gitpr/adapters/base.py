"""Abstract base for Git platform adapters."""

from abc import ABC, abstractmethod
from typing import List

from gitpr.errors import GitPrError
from gitpr.models import PR


class GitPlatformError(GitPrError):
    """Raised when a Git platform API call fails."""

    pass


class GitPlatformAdapter(ABC):
    """Pull request operations git-pr needs from a hosting platform."""

    @abstractmethod
    def get_pr(self, repo: str, pr_number: int) -> PR:
        """Fetch PR by number."""
        ...

    @abstractmethod
    def update_pr(self, repo: str, pr_number: int, title: str | None = None, body: str | None = None) -> PR:
        """Change title and/or body of a PR; None leaves the field as is."""
        ...

    @abstractmethod
    def create_pr(self, repo: str, base: str, head: str, title: str, body: str) -> PR:
        """Open a pull request from head into base."""
        ...

    @abstractmethod
    def list_prs(self, repo: str) -> List[PR]:
        """List open pull requests of the repository."""
        ...
