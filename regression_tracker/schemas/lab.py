"""
Pydantic schemas for the test lab overview of a project.
"""

from typing import Literal

from pydantic import BaseModel

from .project import ImportedScript


# What the lab shows for a script, in order of precedence
DisplayState = Literal["completed", "has-issues", "in-progress", "pending"]


class LabSummary(BaseModel):
    """Imported scripts of a project grouped into the lab's tabs."""
    all_scripts: list[ImportedScript] = []
    completed: list[ImportedScript] = []
    pending: list[ImportedScript] = []
    with_issues: list[ImportedScript] = []
    display_states: dict[str, DisplayState] = {}
