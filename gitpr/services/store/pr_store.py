"""Branch to PR number records in a SQLite database (<git-dir>/github.sqlite3).

One row per branch; saving again for the same branch replaces the row. The
records only cache what the hosting service knows: a PR closed remotely keeps
its row.
"""

import contextlib
import logging
import sqlite3
from collections.abc import Iterator
from pathlib import Path

from gitpr.errors import StoreError
from gitpr.services.store.schemas import PullRequestRecord

LOG = logging.getLogger("gitpr.services.store.pr_store")

_CREATE_TABLE = """
    CREATE TABLE IF NOT EXISTS pull_requests (
        branch_name         TEXT    PRIMARY KEY,
        pull_request_number INTEGER NOT NULL
    )
"""


@contextlib.contextmanager
def _connect(db_path: Path) -> Iterator[sqlite3.Connection]:
    """Open the database, ensure the table exists, commit and close on exit.

    Raises:
        StoreError: If the file cannot be created, opened or queried.
    """
    try:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(db_path)
    except (OSError, sqlite3.Error) as e:
        raise StoreError(f"Cannot open PR store {db_path}: {e}") from e
    conn.row_factory = sqlite3.Row
    try:
        with conn:
            conn.execute(_CREATE_TABLE)
            yield conn
    except sqlite3.Error as e:
        raise StoreError(f"PR store {db_path}: {e}") from e
    finally:
        conn.close()


def list_records(db_path: Path) -> list[PullRequestRecord]:
    """Return every stored record ordered by branch name."""
    with _connect(db_path) as conn:
        rows = conn.execute(
            "SELECT branch_name, pull_request_number FROM pull_requests ORDER BY branch_name"
        ).fetchall()
    return [PullRequestRecord(**dict(row)) for row in rows]


def load_pr_number(db_path: Path, branch_name: str) -> int | None:
    """Return the PR number recorded for branch_name, or None."""
    with _connect(db_path) as conn:
        row = conn.execute(
            "SELECT pull_request_number FROM pull_requests WHERE branch_name = ?",
            (branch_name,),
        ).fetchone()
    return int(row["pull_request_number"]) if row else None


def save_pr_number(db_path: Path, branch_name: str, pr_number: int) -> PullRequestRecord:
    """Insert or replace the record for branch_name."""
    record = PullRequestRecord(branch_name=branch_name, pull_request_number=pr_number)
    with _connect(db_path) as conn:
        conn.execute(
            "INSERT OR REPLACE INTO pull_requests (branch_name, pull_request_number) VALUES (?, ?)",
            (record.branch_name, record.pull_request_number),
        )
    LOG.info("Recorded PR #%s for branch %s", pr_number, branch_name)
    return record
