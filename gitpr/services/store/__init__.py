"""Local storage of branch to pull request records."""

from gitpr.services.store.pr_store import list_records, load_pr_number, save_pr_number
from gitpr.services.store.schemas import PullRequestRecord

__all__ = [
    "PullRequestRecord",
    "list_records",
    "load_pr_number",
    "save_pr_number",
]
