"""Exceptions raised by git-pr commands.

Every error derives from GitPrError so the command router can report it
and exit non-zero.
"""


class GitPrError(Exception):
    """Base class for all git-pr errors."""

    pass


class ConfigurationError(GitPrError):
    """Raised when a required setting (token, editor) is missing."""

    pass


class UsageError(GitPrError):
    """Raised when a command is given arguments it does not accept."""

    pass


class ValidationError(GitPrError):
    """Raised when the repository state does not allow the command."""

    pass


class ProtectedBranchError(ValidationError):
    """Raised when a PR is requested from the protected base branch itself."""

    pass


class NoCommitsError(ValidationError):
    """Raised when the branch has zero commits ahead of its base."""

    pass


class NoPullRequestError(ValidationError):
    """Raised when no PR is recorded for the current branch."""

    pass


class UserCanceled(GitPrError):
    """Raised when the user declines to retry a failed editor session."""

    pass


class CommandError(GitPrError):
    """Raised when an external command exits non-zero or cannot be run."""

    pass


class StoreError(GitPrError):
    """Raised when the local PR record database cannot be opened or queried."""

    pass


class PullRequestIndexError(GitPrError, IndexError):
    """Raised when a PR list index is out of range."""

    pass
