"""Read-only repository metadata: root, remote URL, branches, tracking info."""

import logging
from pathlib import Path
from urllib.parse import urlsplit

from gitpr.errors import ValidationError
from gitpr.services.git._run import GitRunnerError, _run_git

_HEADS_PREFIX = "refs/heads/"


def repo_root(repo_dir: Path | None = None, log: logging.Logger | None = None) -> Path:
    """Return the top-level directory of the working tree."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    return Path(_run_git(["rev-parse", "--show-toplevel"], cwd=cwd, log=log).strip())


def remote_url(
    remote: str = "origin",
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> str:
    """Return the fetch URL of the given remote."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    return _run_git(["remote", "get-url", remote], cwd=cwd, log=log).strip()


def current_branch(repo_dir: Path | None = None, log: logging.Logger | None = None) -> str:
    """Return the name of the checked out branch (HEAD when detached)."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    return _run_git(["rev-parse", "--abbrev-ref", "HEAD"], cwd=cwd, log=log).strip()


def _config_value(key: str, cwd: Path, log: logging.Logger | None = None) -> str:
    """Return a git config value, or "" when the key is unset.

    ``git config <key>`` exits with status 1 for a missing key.
    """
    try:
        return _run_git(["config", key], cwd=cwd).strip()
    except GitRunnerError:
        if log:
            log.debug("git config %s is not set", key)
        return ""


def tracking_branch(
    branch_name: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> str:
    """Return the upstream branch name of branch_name, or "" if it tracks nothing."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    merge = _config_value(f"branch.{branch_name}.merge", cwd=cwd, log=log)
    if merge.startswith(_HEADS_PREFIX):
        merge = merge[len(_HEADS_PREFIX) :]
    return merge


def tracking_remote(
    branch_name: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> str:
    """Return the remote branch_name tracks ("." for a local upstream, "" if none)."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    return _config_value(f"branch.{branch_name}.remote", cwd=cwd, log=log)


def parse_remote_url(url: str) -> tuple[str, str]:
    """Split a remote URL into (domain, "owner/repo").

    Accepts scp-like (git@host:owner/repo.git), ssh:// and http(s):// URLs.

    Raises:
        ValidationError: If the URL has no host or repository path.
    """
    url = url.strip()
    if "://" in url:
        parts = urlsplit(url)
        domain = parts.hostname or ""
        path = parts.path
    elif ":" in url:
        host, path = url.split(":", 1)
        domain = host.rsplit("@", 1)[-1]
    else:
        raise ValidationError(f"Cannot parse remote URL: {url!r}")

    repo = path.strip("/")
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    if not domain or "/" not in repo:
        raise ValidationError(f"Cannot parse remote URL: {url!r}")
    return domain, repo


def git_dir(repo_dir: Path | None = None, log: logging.Logger | None = None) -> Path:
    """Return the absolute git directory shared by all worktrees.

    In a linked worktree or a submodule ``.git`` is a file, so the directory
    has to come from git rather than from ``<root>/.git``.
    """
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    out = _run_git(["rev-parse", "--git-common-dir"], cwd=cwd, log=log).strip()
    return (cwd / out).resolve()
