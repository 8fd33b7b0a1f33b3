"""Command handlers: create, view, list.

Each handler is one linear sequence of git, editor, API and store calls;
any error aborts the command. A push followed by a failed API call leaves
the branch pushed and no record written.
"""

import logging
import webbrowser
from collections.abc import Callable
from pathlib import Path
from typing import List

from gitpr.adapters.base import GitPlatformAdapter
from gitpr.config import AppConfig
from gitpr.context import RepoContext
from gitpr.errors import (
    CommandError,
    NoCommitsError,
    NoPullRequestError,
    ProtectedBranchError,
    PullRequestIndexError,
)
from gitpr.models import PR
from gitpr.services.editor import edit_string_with_editor
from gitpr.services.git import commit_subject, commits_ahead_of_base, push_branch, push_remote_for
from gitpr.services.pr_body import generate_title_and_body
from gitpr.services.store import load_pr_number, save_pr_number

LOG = logging.getLogger("gitpr.commands")

TITLE_WIDTH = 31


def store_path(ctx: RepoContext, config: AppConfig) -> Path:
    """Location of the branch to PR number database for this repository."""
    return ctx.git_dir / config.repo.store_path


def _open_url(url: str, open_url: Callable[[str], bool]) -> None:
    if not open_url(url):
        raise CommandError(f"Could not open {url}")


def validate_local_branch(ctx: RepoContext, config: AppConfig) -> None:
    """Refuse to open a PR from the protected branch itself."""
    protected = config.repo.protected_branch
    if ctx.branch == protected:
        raise ProtectedBranchError(
            f"Cannot open a pull request against remote `{protected}` branch while on local `{protected}` branch!\n"
            "Rename your local branch to a feature branch"
        )


def base_ref_for(ctx: RepoContext, config: AppConfig, use_master: bool = False) -> str:
    """The tracking branch, or the default base when forced or when nothing is tracked."""
    if use_master or not ctx.tracking_branch.strip():
        return config.repo.default_base
    return ctx.tracking_branch


def read_pull_request_template(ctx: RepoContext, config: AppConfig) -> str | None:
    """Return the repository's PR template text, or None if it has none."""
    path = ctx.repo_dir / config.repo.template_path
    if not path.is_file():
        return None
    LOG.debug("Using PR template %s", path)
    return path.read_text(encoding="utf-8")


def handle_create(
    ctx: RepoContext,
    config: AppConfig,
    adapter: GitPlatformAdapter,
    use_master: bool = False,
    edit: Callable[[str, str | None], str] = edit_string_with_editor,
) -> PR:
    """Open a PR for the current branch, or update the one already recorded.

    Raises:
        ProtectedBranchError: On the protected branch.
        NoCommitsError: If the branch is not ahead of its base.
    """
    validate_local_branch(ctx, config)

    base_ref = base_ref_for(ctx, config, use_master)
    commits = commits_ahead_of_base(base_ref, repo_dir=ctx.repo_dir, log=LOG)
    if not commits:
        raise NoCommitsError(
            f"You are zero commits ahead of {base_ref}.\n"
            "Did you forget to commit or switch to your feature branch?"
        )
    LOG.info("%d commit(s) ahead of %s", len(commits), base_ref)

    db_path = store_path(ctx, config)
    pr_number = load_pr_number(db_path, ctx.branch)
    remote = push_remote_for(ctx.remote, config.repo.default_remote)

    if pr_number is not None:
        pr = adapter.get_pr(ctx.repo, pr_number)
        title, body = generate_title_and_body(
            ctx.domain,
            ctx.repo,
            base_ref,
            title=pr.title,
            body=pr.body,
            editor=config.editor.editor,
            repo_dir=ctx.repo_dir,
            edit=edit,
            log=LOG,
        )
        push_branch(ctx.branch, remote=remote, repo_dir=ctx.repo_dir, log=LOG)
        updated = adapter.update_pr(ctx.repo, pr.number, title=title, body=body)
        print(f"Updated pull request #{updated.number}")
        return updated

    summary = read_pull_request_template(ctx, config)
    # Earliest commit in the range; git log lists newest first
    default_title = commit_subject(commits[-1], repo_dir=ctx.repo_dir, log=LOG)
    title, body = generate_title_and_body(
        ctx.domain,
        ctx.repo,
        base_ref,
        title=default_title,
        summary=summary,
        editor=config.editor.editor,
        repo_dir=ctx.repo_dir,
        edit=edit,
        log=LOG,
    )
    push_branch(ctx.branch, remote=remote, repo_dir=ctx.repo_dir, log=LOG)
    created = adapter.create_pr(ctx.repo, base_ref, ctx.branch, title or default_title, body)
    save_pr_number(db_path, ctx.branch, created.number)
    print(f"Created pull request #{created.number}: {created.html_url or ctx.pull_request_url(created.number)}")
    return created


def handle_view(
    ctx: RepoContext,
    config: AppConfig,
    open_url: Callable[[str], bool] = webbrowser.open,
) -> str:
    """Open the recorded PR of the current branch in the browser."""
    pr_number = load_pr_number(store_path(ctx, config), ctx.branch)
    if pr_number is None:
        raise NoPullRequestError(f"No pull request recorded for branch {ctx.branch}; run `git pr create` first")
    url = ctx.pull_request_url(pr_number)
    print(f"Navigating to {url}")
    _open_url(url, open_url)
    return url


def format_pr_line(index: int, pr: PR) -> str:
    return f"{index})\t{pr.title[:TITLE_WIDTH]}..."


def handle_list(ctx: RepoContext, adapter: GitPlatformAdapter) -> List[PR]:
    """Print the repository's open PRs, one numbered line each."""
    prs = adapter.list_prs(ctx.repo)
    for index, pr in enumerate(prs):
        print(format_pr_line(index, pr))
    return prs


def handle_browse_pr(
    ctx: RepoContext,
    adapter: GitPlatformAdapter,
    index: int,
    open_url: Callable[[str], bool] = webbrowser.open,
) -> str:
    """Open the PR at position index of the list output in the browser."""
    prs = adapter.list_prs(ctx.repo)
    if not 0 <= index < len(prs):
        raise PullRequestIndexError(f"No pull request at index {index} ({len(prs)} open)")
    pr = prs[index]
    url = pr.html_url or ctx.pull_request_url(pr.number)
    print(f"Navigating to {url}")
    _open_url(url, open_url)
    return url
