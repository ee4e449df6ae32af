"""
Pydantic schemas for project issues.
"""

from datetime import datetime
from typing import Literal, Optional

from .base import RecordModel
from .script import Screenshot


# Issue lifecycle: open -> fixed -> reopened -> fixed ...
IssueStatus = Literal["open", "fixed", "reopened"]


class IssueBase(RecordModel):
    """Caller-supplied issue fields."""
    title: str
    description: str
    status: IssueStatus = "open"
    project_id: str
    script_ids: list[str] = []
    screenshots: list[Screenshot] = []
    resolution: Optional[str] = None


class IssueCreate(IssueBase):
    """Payload for raising an issue. The number is assigned by the tracker."""
    pass


class IssueUpdate(RecordModel):
    """
    Patch for an existing issue.

    Setting ``resolution`` to None explicitly clears it.
    """
    title: str | None = None
    description: str | None = None
    status: IssueStatus | None = None
    screenshots: list[Screenshot] | None = None
    resolution: str | None = None


class Issue(IssueBase):
    """An issue with its project-scoped number and timestamps."""
    id: str
    issue_number: int
    created_at: datetime
    updated_at: datetime
