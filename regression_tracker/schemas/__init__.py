"""
Pydantic schemas package.

Exports the record and patch types of every collection.
"""

from .base import RecordModel

from .folder import (
    Folder,
    FolderUpdate,
)

from .script import (
    TestEnvironment,
    TestType,
    Screenshot,
    ScriptBase,
    ScriptCreate,
    ScriptUpdate,
    Script,
)

from .project import (
    ExecutionStatus,
    Project,
    ImportedScript,
    ImportedScriptUpdate,
)

from .lab import (
    DisplayState,
    LabSummary,
)

from .issue import (
    IssueStatus,
    IssueBase,
    IssueCreate,
    IssueUpdate,
    Issue,
)

__all__ = [
    "RecordModel",
    # Folder schemas
    "Folder",
    "FolderUpdate",
    # Script schemas
    "TestEnvironment",
    "TestType",
    "Screenshot",
    "ScriptBase",
    "ScriptCreate",
    "ScriptUpdate",
    "Script",
    # Project schemas
    "ExecutionStatus",
    "Project",
    "ImportedScript",
    "ImportedScriptUpdate",
    # Issue schemas
    "IssueStatus",
    "IssueBase",
    "IssueCreate",
    "IssueUpdate",
    "Issue",
    # Lab schemas
    "DisplayState",
    "LabSummary",
]
