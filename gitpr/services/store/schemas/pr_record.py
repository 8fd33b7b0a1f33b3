"""Branch to pull request mapping as stored in the pull_requests table."""

from pydantic import BaseModel, Field


class PullRequestRecord(BaseModel):
    """One row of the pull_requests table."""

    branch_name: str = Field(..., min_length=1, description="Local branch name (primary key)")
    pull_request_number: int = Field(..., ge=1, description="PR number on the hosting service")

    model_config = {"extra": "forbid", "frozen": True}
