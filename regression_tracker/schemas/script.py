"""
Pydantic schemas for catalog scripts and their screenshots.
"""

from datetime import datetime
from typing import Literal

from .base import RecordModel


# Environments a script can be run in
TestEnvironment = Literal["Online", "Batch", "Online & Batch"]

# Whether a script exercises the happy path or a failure path
TestType = Literal["Positive", "Negative"]


class Screenshot(RecordModel):
    """
    An image attached to a script, an imported script or an issue.

    ``path`` is an opaque content reference (for instance a data URL) and
    is passed through unchanged.
    """
    id: str
    filename: str
    description: str = ""
    path: str


class ScriptBase(RecordModel):
    """Authorable script fields."""
    script_id: str
    short_description: str
    test_environment: TestEnvironment
    test_type: TestType
    purpose: str
    assumptions: list[str] = []
    expected_results: str
    script_details: str
    screenshots: list[Screenshot] = []
    subfolder_id: str


class ScriptCreate(ScriptBase):
    """Payload for adding a script to the catalog."""
    pass


class ScriptUpdate(RecordModel):
    """Patch for an existing script. All fields are optional."""
    script_id: str | None = None
    short_description: str | None = None
    test_environment: TestEnvironment | None = None
    test_type: TestType | None = None
    purpose: str | None = None
    assumptions: list[str] | None = None
    expected_results: str | None = None
    script_details: str | None = None
    screenshots: list[Screenshot] | None = None
    subfolder_id: str | None = None


class Script(ScriptBase):
    """A catalog script with its system-generated fields."""
    id: str
    created_at: datetime
    updated_at: datetime
