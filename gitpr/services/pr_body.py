"""Compose the pull request title and body from commit messages.

The draft shown in the editor is split into sections by fixed HTML-comment
marker lines:

    <!-- ENTER PULL REQUEST TITLE BELOW -->
    <title>
    <!-- SUMMARIZE PULL REQUEST BELOW -->
    <summary>
    <!-- The following text is auto-generated from your commit messages -->
    ### Commit Summary
    <one block per commit, oldest first>

After editing, the title section is cut out of the text; everything from the
summary marker on becomes the PR body. The markers stay in the published body
so the summary can be recovered on the next update.
"""

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from gitpr.models import Commit
from gitpr.services.editor import edit_string_with_editor
from gitpr.services.git import commit_log

TITLE_MARKER = "<!-- ENTER PULL REQUEST TITLE BELOW -->"
SUMMARY_MARKER = "<!-- SUMMARIZE PULL REQUEST BELOW -->"
AUTOGEN_MARKER = "<!-- The following text is auto-generated from your commit messages -->"
COMMIT_SUMMARY_HEADING = "### Commit Summary"
COMMIT_DELIMITER = "---"

LOG = logging.getLogger("gitpr.services.pr_body")


def _section_bounds(text: str, start_marker: str, end_marker: str) -> tuple[int, int] | None:
    """Return (start of start_marker, start of the following end_marker), or None."""
    start = text.find(start_marker)
    if start == -1:
        return None
    end = text.find(end_marker, start + len(start_marker))
    if end == -1:
        return None
    return start, end


def _section(text: str | None, start_marker: str, end_marker: str) -> str | None:
    """Return the raw text between two markers, or None if either is missing."""
    if not text:
        return None
    bounds = _section_bounds(text, start_marker, end_marker)
    if bounds is None:
        return None
    start, end = bounds
    return text[start + len(start_marker) : end]


def _non_empty(value: str) -> str | None:
    value = value.strip()
    return value or None


def extract_summary(body: str | None) -> str | None:
    """Return the trimmed summary section of an existing PR body, or None."""
    section = _section(body, SUMMARY_MARKER, AUTOGEN_MARKER)
    return _non_empty(section) if section is not None else None


def strip_title_section(text: str) -> str:
    """Remove every TITLE_MARKER...SUMMARY_MARKER span, keeping SUMMARY_MARKER."""
    while True:
        bounds = _section_bounds(text, TITLE_MARKER, SUMMARY_MARKER)
        if bounds is None:
            return text
        start, end = bounds
        text = text[:start] + text[end:]


def commit_url(domain: str, repo: str, sha: str) -> str:
    return f"https://{domain}/{repo}/commit/{sha}"


def render_commit_log(domain: str, repo: str, commits: Sequence[Commit]) -> str:
    """Render one markdown block per commit, in the given (oldest first) order."""
    blocks = [
        f"#### [{c.subject}]({commit_url(domain, repo, c.sha)})\n{c.body}\n{COMMIT_DELIMITER}" for c in commits
    ]
    return "".join(block + "\n" for block in blocks)


def render_document(title: str | None, summary: str | None, rendered_log: str) -> str:
    """Build the editable draft; absent title or summary render as empty lines."""
    return (
        f"{TITLE_MARKER}\n"
        f"{title or ''}\n"
        f"{SUMMARY_MARKER}\n"
        f"{summary or ''}\n"
        f"{AUTOGEN_MARKER}\n"
        f"{COMMIT_SUMMARY_HEADING}\n"
        f"{rendered_log}"
    )


def parse_document(text: str, title: str | None = None) -> tuple[str | None, str]:
    """Split an edited draft into (title, body).

    If the title section cannot be found (markers edited away), title is
    returned unchanged and text is returned as the body untouched.
    """
    section = _section(text, TITLE_MARKER, SUMMARY_MARKER)
    if section is None:
        LOG.warning("Title markers not found in edited text; keeping previous title")
        return title, text
    return _non_empty(section), strip_title_section(text)


def generate_title_and_body(
    domain: str,
    repo: str,
    base_ref: str,
    head: str = "HEAD",
    title: str | None = None,
    summary: str | None = None,
    body: str | None = None,
    editor: str | None = None,
    repo_dir: Path | None = None,
    edit: Callable[[str, str | None], str] = edit_string_with_editor,
    log: logging.Logger | None = None,
) -> tuple[str | None, str]:
    """Compose the PR draft, let the user edit it and parse the result.

    Args:
        domain: Web host of the repository (e.g. github.com), used in commit links.
        repo: Repository as owner/name.
        base_ref: Exclusive start of the commit range.
        head: Inclusive end of the commit range.
        title: Current or default PR title.
        summary: Summary text; when None it is recovered from body.
        body: Existing PR body when updating.
        editor: Editor command passed to edit.
        repo_dir: Repository directory for git; uses cwd if None.
        edit: Editor session; receives the draft and editor, returns the edited text.
        log: Optional logger.

    Returns:
        (title, body) where body no longer contains the title section.
    """
    if summary is None:
        summary = extract_summary(body)

    commits = commit_log(base_ref, head, repo_dir=repo_dir, log=log)
    draft = render_document(title, summary, render_commit_log(domain, repo, commits))

    edited = edit(draft, editor)
    return parse_document(edited, title)
