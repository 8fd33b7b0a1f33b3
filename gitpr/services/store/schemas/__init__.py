"""Record schemas for the local store."""

from gitpr.services.store.schemas.pr_record import PullRequestRecord

__all__ = ["PullRequestRecord"]
