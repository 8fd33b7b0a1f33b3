"""Repository facts gathered once per invocation and passed to the handlers."""

import logging
from pathlib import Path

from pydantic import BaseModel, Field

from gitpr.services.git import (
    current_branch,
    git_dir,
    parse_remote_url,
    remote_url,
    repo_root,
    tracking_branch,
    tracking_remote,
)


class RepoContext(BaseModel):
    """Where we are: repository, hosting coordinates and current branch."""

    repo_dir: Path = Field(..., description="Top-level directory of the working tree")
    git_dir: Path = Field(..., description="Git directory shared by all worktrees of the repository")
    remote_url: str = Field(..., description="URL of the origin remote")
    domain: str = Field(..., description="Web host of the repository, e.g. github.com")
    repo: str = Field(..., description="Repository as owner/name")
    branch: str = Field(..., description="Checked out local branch")
    remote: str = Field(default="", description="Remote the branch tracks; '.' for local, '' for none")
    tracking_branch: str = Field(default="", description="Upstream branch name; '' if none")

    model_config = {"frozen": True}

    def pull_request_url(self, pr_number: int) -> str:
        """Browser URL of a pull request in this repository."""
        return f"https://{self.domain}/{self.repo}/pull/{pr_number}"


def load_context(
    repo_dir: Path | None = None,
    remote: str = "origin",
    log: logging.Logger | None = None,
) -> RepoContext:
    """Query git for everything the commands need about the current repository."""
    root = repo_root(repo_dir, log=log)
    common_dir = git_dir(root, log=log)
    url = remote_url(remote, repo_dir=root, log=log)
    domain, repo = parse_remote_url(url)
    branch = current_branch(root, log=log)
    return RepoContext(
        repo_dir=root,
        git_dir=common_dir,
        remote_url=url,
        domain=domain,
        repo=repo,
        branch=branch,
        remote=tracking_remote(branch, repo_dir=root, log=log),
        tracking_branch=tracking_branch(branch, repo_dir=root, log=log),
    )
