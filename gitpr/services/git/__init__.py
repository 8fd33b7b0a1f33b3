"""Git operations: repository metadata, commit ranges, push."""

from gitpr.services.git._run import GitRunnerError
from gitpr.services.git.commits import commit_log, commit_subject, commits_ahead_of_base
from gitpr.services.git.push import push_branch, push_remote_for
from gitpr.services.git.repo import (
    current_branch,
    git_dir,
    parse_remote_url,
    remote_url,
    repo_root,
    tracking_branch,
    tracking_remote,
)

__all__ = [
    "GitRunnerError",
    "commit_log",
    "commit_subject",
    "commits_ahead_of_base",
    "current_branch",
    "git_dir",
    "parse_remote_url",
    "push_branch",
    "push_remote_for",
    "remote_url",
    "repo_root",
    "tracking_branch",
    "tracking_remote",
]
