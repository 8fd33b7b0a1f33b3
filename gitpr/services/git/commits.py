"""Commit ranges: hashes, subjects and messages between a base and HEAD."""

import logging
from pathlib import Path

from gitpr.models import Commit
from gitpr.services.git._run import _run_git

# Field and record separators for --pretty output; neither appears in commit text.
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"


def commits_ahead_of_base(
    base_ref: str,
    head: str = "HEAD",
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> list[str]:
    """Return hashes of commits in base_ref..head, newest first (git log order)."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    out = _run_git(["log", "--pretty=%H", f"{base_ref}..{head}"], cwd=cwd, log=log)
    return [line.strip() for line in out.splitlines() if line.strip()]


def commit_subject(
    commit_hash: str,
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> str:
    """Return the subject line of a single commit."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    return _run_git(["log", commit_hash, "--pretty=%s", "--max-count=1"], cwd=cwd, log=log).rstrip()


def commit_log(
    base_ref: str,
    head: str = "HEAD",
    repo_dir: Path | None = None,
    log: logging.Logger | None = None,
) -> list[Commit]:
    """Return commits in base_ref..head oldest first, with subject and body.

    Bodies are kept as git prints them for %b, trailing newline included, so a
    commit with a message body renders with a blank line before its delimiter.

    Args:
        base_ref: Exclusive start of the range.
        head: Inclusive end of the range.
        repo_dir: Repository directory; uses cwd if None.
        log: Optional logger.

    Returns:
        List of Commit, oldest first; empty when head is not ahead of base.
    """
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    fmt = f"--pretty=format:%H{_FIELD_SEP}%s{_FIELD_SEP}%b{_RECORD_SEP}"
    out = _run_git(["log", "--reverse", fmt, f"{base_ref}..{head}"], cwd=cwd, log=log)
    commits: list[Commit] = []
    for record in out.split(_RECORD_SEP):
        record = record.lstrip("\n")
        if not record:
            continue
        sha, subject, body = (record.split(_FIELD_SEP, 2) + ["", ""])[:3]
        commits.append(Commit(sha=sha.strip(), subject=subject, body=body))
    return commits
