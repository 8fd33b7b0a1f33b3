"""Edit a string in the user's editor through a temporary file.

The temporary file lives only for the duration of one edit_string_with_editor
call and is removed whether the edit succeeds, is canceled or fails.
"""

import contextlib
import enum
import logging
import os
import shlex
import subprocess
import tempfile
from collections.abc import Callable, Iterator
from pathlib import Path

from gitpr.errors import CommandError, ConfigurationError, UserCanceled

LOG = logging.getLogger("gitpr.services.editor")

RETRY_PROMPT = "Editor exited unsuccessfully. Try again? (y/n) [y] "


class EditorRetry(enum.Enum):
    """What to do after the editor exits with a failure status."""

    RETRY = "retry"
    CANCEL = "cancel"


def retry_decision(answer: str | None) -> EditorRetry:
    """Map the user's answer to the retry prompt; empty input means yes."""
    answer = (answer or "").strip().lower() or "y"
    return EditorRetry.RETRY if answer == "y" else EditorRetry.CANCEL


@contextlib.contextmanager
def scoped_temp_file(content: str, prefix: str = "pull-request-body", suffix: str = ".md") -> Iterator[Path]:
    """Write content to a named temporary file and remove it on exit."""
    fd, name = tempfile.mkstemp(prefix=prefix, suffix=suffix)
    path = Path(name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        yield path
    finally:
        path.unlink(missing_ok=True)


def _run_editor(editor: str, path: Path) -> bool:
    """Run the editor on path; return True when it exits with status 0."""
    cmd = shlex.split(editor) + [str(path)]
    LOG.debug("Running editor: %s", cmd)
    try:
        return subprocess.run(cmd).returncode == 0
    except FileNotFoundError as e:
        raise CommandError(f"Editor not found: {cmd[0]}") from e


def edit_string_with_editor(
    text: str,
    editor: str | None,
    prompt: Callable[[str], str] = input,
) -> str:
    """Let the user edit text in editor and return the result.

    Args:
        text: Initial file content.
        editor: Editor command (value of $EDITOR); may include arguments.
        prompt: Asks the retry question and returns the answer.

    Returns:
        Full file content after the editor exits successfully.

    Raises:
        ConfigurationError: If no editor is configured.
        UserCanceled: If the editor fails and the user declines to retry.
        CommandError: If the editor executable cannot be found.
    """
    if not editor or not editor.strip():
        raise ConfigurationError("EDITOR environment variable must be set!")

    with scoped_temp_file(text) as path:
        while not _run_editor(editor, path):
            LOG.warning("Editor %s exited unsuccessfully", editor)
            try:
                answer = prompt(RETRY_PROMPT)
            except EOFError:
                # stdin closed: nobody can answer, so do not loop on the default
                answer = "n"
            if retry_decision(answer) is EditorRetry.CANCEL:
                raise UserCanceled("User canceled")
        return path.read_text(encoding="utf-8")
