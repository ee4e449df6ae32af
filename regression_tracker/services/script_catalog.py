"""
Script catalog service.

The catalog owns the authoritative test scripts. Each script is filed
under one subfolder; the reference is not checked against the folders
collection.
"""

import logging
from typing import Iterable, Optional

from ..schemas.script import Screenshot, Script, ScriptCreate, ScriptUpdate
from .collection_store import (
    SCRIPTS_KEY,
    CollectionStore,
    apply_patch,
    find_index,
    load_records,
    save_records,
)
from .identifiers import generate_id, next_timestamp, utc_now

logger = logging.getLogger(__name__)


class ScriptCatalog:
    """CRUD over the scripts collection."""

    def __init__(self, store: CollectionStore):
        self.store = store

    def get_scripts(self) -> list[Script]:
        return load_records(self.store, SCRIPTS_KEY, Script)

    def get_script(self, script_id: str) -> Optional[Script]:
        for script in self.get_scripts():
            if script.id == script_id:
                return script
        return None

    def add_script(self, script_data: ScriptCreate) -> Script:
        """
        Add a script to the catalog.

        The assumptions list is stored exactly as given; callers strip
        blank entries with ``clean_assumptions`` before submitting.
        """
        scripts = self.get_scripts()
        now = utc_now()
        script = Script(
            **script_data.model_dump(),
            id=generate_id("script"),
            created_at=now,
            updated_at=now,
        )
        scripts.append(script)
        save_records(self.store, SCRIPTS_KEY, scripts)
        logger.info("Added script %s (%s)", script.id, script.script_id)
        return script

    def update_script(self, script_id: str, script_data: ScriptUpdate) -> None:
        scripts = self.get_scripts()
        index = find_index(scripts, script_id)
        if index == -1:
            logger.debug("update_script: no script %s", script_id)
            return
        script = scripts[index]
        apply_patch(script, script_data)
        script.updated_at = next_timestamp(script.updated_at)
        save_records(self.store, SCRIPTS_KEY, scripts)

    def delete_script(self, script_id: str) -> None:
        """Remove a script. Snapshots already imported into projects are kept."""
        scripts = self.get_scripts()
        kept = [s for s in scripts if s.id != script_id]
        if len(kept) == len(scripts):
            logger.debug("delete_script: no script %s", script_id)
            return
        save_records(self.store, SCRIPTS_KEY, kept)
        logger.info("Deleted script %s", script_id)

    def delete_scripts_in_subfolders(self, subfolder_ids: Iterable[str]) -> list[str]:
        """Remove every script filed under one of ``subfolder_ids``; returns their ids."""
        targets = set(subfolder_ids)
        scripts = self.get_scripts()
        removed = [s.id for s in scripts if s.subfolder_id in targets]
        if not removed:
            return []
        save_records(self.store, SCRIPTS_KEY, [s for s in scripts if s.subfolder_id not in targets])
        logger.info("Deleted %d script(s) from removed subfolders", len(removed))
        return removed


def filter_scripts(
    scripts: list[Script],
    subfolder_id: Optional[str] = None,
    search: Optional[str] = None,
) -> list[Script]:
    """
    Narrow a script list the way the catalog and import screens do.

    Args:
        scripts: Scripts to filter.
        subfolder_id: Keep only scripts filed under this subfolder.
        search: Case-insensitive substring matched against ``script_id``
            and ``short_description``.
    """
    result = scripts
    if subfolder_id:
        result = [s for s in result if s.subfolder_id == subfolder_id]
    if search:
        term = search.lower()
        result = [
            s for s in result
            if term in s.script_id.lower() or term in s.short_description.lower()
        ]
    return result


def clean_assumptions(assumptions: Iterable[str]) -> list[str]:
    """Drop blank assumption lines, keeping the order of the rest."""
    return [a for a in assumptions if a.strip()]


def new_screenshot(filename: str, path: str, description: str = "") -> Screenshot:
    return Screenshot(
        id=generate_id("screenshot"),
        filename=filename,
        description=description,
        path=path,
    )
