"""git-pr: open and update pull requests from the current git branch."""

__version__ = "0.1.0"
