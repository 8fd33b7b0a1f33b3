"""Push the feature branch to its remote."""

import logging
from pathlib import Path

from gitpr.services.git._run import _run_git

DEFAULT_REMOTE = "origin"


def push_remote_for(tracking_remote: str, default: str = DEFAULT_REMOTE) -> str:
    """Return the remote to push to: the tracking remote unless it is local or unset."""
    if not tracking_remote or tracking_remote == ".":
        return default
    return tracking_remote


def push_branch(
    branch_name: str,
    remote: str = DEFAULT_REMOTE,
    force: bool = True,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Push branch_name to remote; force-push by default since PR branches are rewritten."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    args = ["push"]
    if force:
        args.append("--force")
    args.extend([remote, branch_name])
    _run_git(args, cwd=cwd, log=log)
    if log:
        log.info("Pushed branch %s to %s", branch_name, remote)
