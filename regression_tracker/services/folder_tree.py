"""
Folder hierarchy service.

Provides the folder manager and helpers for:
- Listing root folders and subfolders
- Building a nested folder tree from flat lists
- Describing where a script lives (parent / subfolder names)

The tree has exactly two levels. Deleting a folder removes its direct
subfolders in the same write but leaves scripts that point at them in
place; see ``RegressionWorkspace.delete_folder`` for the opt-in cascade.
"""

import logging
from collections import defaultdict
from typing import Optional

from ..schemas.folder import Folder, FolderUpdate
from ..schemas.script import Script
from .collection_store import (
    FOLDERS_KEY,
    CollectionStore,
    apply_patch,
    find_index,
    load_records,
    save_records,
)
from .identifiers import generate_id

logger = logging.getLogger(__name__)

ROOT_LOCATION = "Root"
UNKNOWN_LOCATION = "Unknown"


class FolderHierarchy:
    """Two-level folder tree stored in the folders collection."""

    def __init__(self, store: CollectionStore):
        self.store = store

    def get_folders(self) -> list[Folder]:
        return load_records(self.store, FOLDERS_KEY, Folder)

    def add_folder(self, name: str, parent_id: Optional[str] = None) -> Folder:
        """Create a root folder, or a subfolder when ``parent_id`` is given."""
        folders = self.get_folders()
        folder = Folder(
            id=generate_id("folder"),
            name=name,
            parent_id=parent_id,
            is_subfolder=parent_id is not None,
        )
        folders.append(folder)
        save_records(self.store, FOLDERS_KEY, folders)
        logger.info("Added folder %s (parent=%s)", folder.id, parent_id)
        return folder

    def update_folder(self, folder_id: str, folder_data: FolderUpdate) -> None:
        folders = self.get_folders()
        index = find_index(folders, folder_id)
        if index == -1:
            logger.debug("update_folder: no folder %s", folder_id)
            return
        apply_patch(folders[index], folder_data)
        save_records(self.store, FOLDERS_KEY, folders)

    def delete_folder(self, folder_id: str) -> list[str]:
        """
        Delete a folder and its direct subfolders in one write.

        Returns:
            Ids of every folder removed (empty if ``folder_id`` is unknown).
        """
        folders = self.get_folders()
        kept = [f for f in folders if f.id != folder_id and f.parent_id != folder_id]
        removed = [f.id for f in folders if f.id == folder_id or f.parent_id == folder_id]
        if not removed:
            logger.debug("delete_folder: no folder %s", folder_id)
            return []
        save_records(self.store, FOLDERS_KEY, kept)
        logger.info("Deleted folder %s and %d subfolder(s)", folder_id, len(removed) - 1)
        return removed

    def get_root_folders(self) -> list[Folder]:
        return [f for f in self.get_folders() if not f.is_subfolder]

    def get_subfolders(self, parent_id: str) -> list[Folder]:
        return [f for f in self.get_folders() if f.parent_id == parent_id]

    def get_all_subfolders(self) -> list[Folder]:
        return [f for f in self.get_folders() if f.is_subfolder]

    def describe_location(self, subfolder_id: str) -> tuple[str, str]:
        """
        Name the parent folder and subfolder a script is filed under.

        Returns:
            ``(parent name, subfolder name)``. The parent is "Root" when the
            folder has no parent; either part is "Unknown" for dangling ids.
        """
        by_id = {f.id: f for f in self.get_folders()}
        subfolder = by_id.get(subfolder_id)
        if subfolder is None:
            return ROOT_LOCATION, UNKNOWN_LOCATION
        if subfolder.parent_id is None:
            return ROOT_LOCATION, subfolder.name
        parent = by_id.get(subfolder.parent_id)
        return (parent.name if parent else UNKNOWN_LOCATION), subfolder.name


def build_folder_tree(folders: list[Folder], scripts: list[Script]) -> list[dict]:
    """
    Build a nested folder tree from flat lists of folders and scripts.

    Args:
        folders: Flat list of folders.
        scripts: Flat list of catalog scripts.

    Returns:
        A list of root folder dictionaries, each with its subfolders, and
        each subfolder with the ids of the scripts filed under it. Siblings
        are ordered by name.
    """
    children_map: dict[Optional[str], list[Folder]] = defaultdict(list)
    for folder in folders:
        children_map[folder.parent_id].append(folder)

    for parent_id in children_map:
        children_map[parent_id].sort(key=lambda f: (f.name.lower(), f.id))

    script_map: dict[str, list[str]] = defaultdict(list)
    for script in scripts:
        script_map[script.subfolder_id].append(script.id)

    return [
        {
            "id": root.id,
            "name": root.name,
            "subfolders": [
                {
                    "id": sub.id,
                    "name": sub.name,
                    "parent_id": sub.parent_id,
                    "script_ids": script_map.get(sub.id, []),
                }
                for sub in children_map.get(root.id, [])
            ],
        }
        for root in children_map.get(None, [])
        if not root.is_subfolder
    ]
