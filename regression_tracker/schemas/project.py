"""
Pydantic schemas for projects and imported scripts.
"""

from datetime import datetime
from typing import Literal, Optional

from .base import RecordModel
from .script import Screenshot, Script


# Execution state of an imported script
ExecutionStatus = Literal["pending", "in-progress", "completed"]


class Project(RecordModel):
    """A project owned by a single user."""
    id: str
    name: str
    user_id: str
    created_at: datetime


class ImportedScript(RecordModel):
    """
    A project-scoped copy of a catalog script.

    ``script`` is a value snapshot taken at import time and never follows
    later edits of the catalog script. ``issues`` holds the ids of linked
    issues and is only changed by the issue tracker's linking operations.
    """
    id: str
    original_script_id: str
    project_id: str
    script: Script
    status: ExecutionStatus = "pending"
    remarks: Optional[str] = None
    test_screenshots: list[Screenshot] = []
    issues: list[str] = []
    completed_at: Optional[datetime] = None


class ImportedScriptUpdate(RecordModel):
    """Patch for an imported script's execution state."""
    status: ExecutionStatus | None = None
    remarks: str | None = None
    test_screenshots: list[Screenshot] | None = None
    completed_at: datetime | None = None
