"""
Pydantic schemas for folders.

Folders form a fixed two-level tree: root folders hold subfolders, and
only subfolders hold scripts.
"""

from typing import Optional

from .base import RecordModel


class Folder(RecordModel):
    """A root folder or a subfolder."""
    id: str
    name: str
    parent_id: Optional[str] = None
    is_subfolder: bool = False


class FolderUpdate(RecordModel):
    """Patch for an existing folder. Only the name is mutable."""
    name: str | None = None
