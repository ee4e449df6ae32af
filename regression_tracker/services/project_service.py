"""
Project and import service.

Projects belong to one user. Importing a catalog script into a project
creates an ImportedScript holding a value copy of the script, which then
evolves independently with its own execution status.
"""

import logging
from typing import Iterable, Optional

from ..schemas.project import ImportedScript, ImportedScriptUpdate, Project
from ..schemas.script import Screenshot
from .collection_store import (
    IMPORTED_SCRIPTS_KEY,
    PROJECTS_KEY,
    CollectionStore,
    apply_patch,
    find_index,
    load_records,
    save_records,
)
from .identifiers import generate_id, utc_now
from .script_catalog import ScriptCatalog

logger = logging.getLogger(__name__)


class ProjectManager:
    """Projects and the scripts imported into them."""

    def __init__(self, store: CollectionStore, catalog: Optional[ScriptCatalog] = None):
        self.store = store
        self.catalog = catalog or ScriptCatalog(store)

    # Projects

    def get_projects(self, user_id: str) -> list[Project]:
        """Projects owned by ``user_id``. An ownership filter, not an access check."""
        return [p for p in load_records(self.store, PROJECTS_KEY, Project) if p.user_id == user_id]

    def get_project(self, project_id: str) -> Optional[Project]:
        for project in load_records(self.store, PROJECTS_KEY, Project):
            if project.id == project_id:
                return project
        return None

    def add_project(self, name: str, user_id: str) -> Project:
        projects = load_records(self.store, PROJECTS_KEY, Project)
        project = Project(
            id=generate_id("project"),
            name=name,
            user_id=user_id,
            created_at=utc_now(),
        )
        projects.append(project)
        save_records(self.store, PROJECTS_KEY, projects)
        logger.info("Added project %s for user %s", project.id, user_id)
        return project

    # Imported scripts

    def _all_imported_scripts(self) -> list[ImportedScript]:
        return load_records(self.store, IMPORTED_SCRIPTS_KEY, ImportedScript)

    def get_imported_scripts(self, project_id: str) -> list[ImportedScript]:
        return [s for s in self._all_imported_scripts() if s.project_id == project_id]

    def get_imported_script(self, imported_script_id: str) -> Optional[ImportedScript]:
        for imported in self._all_imported_scripts():
            if imported.id == imported_script_id:
                return imported
        return None

    def imported_script_ids(self, project_id: str) -> set[str]:
        """Catalog script ids already imported into a project."""
        return {s.original_script_id for s in self.get_imported_scripts(project_id)}

    def import_script(self, script_id: str, project_id: str) -> Optional[ImportedScript]:
        """
        Snapshot a catalog script into a project.

        Unknown script ids are ignored. Importing the same script twice
        creates two independent records; callers that want one copy per
        project check ``imported_script_ids`` first.
        """
        script = self.catalog.get_script(script_id)
        if script is None:
            logger.debug("import_script: no script %s", script_id)
            return None

        imported_scripts = self._all_imported_scripts()
        imported = ImportedScript(
            id=generate_id("imported"),
            original_script_id=script_id,
            project_id=project_id,
            script=script.model_copy(deep=True),
            status="pending",
            test_screenshots=[],
            issues=[],
        )
        imported_scripts.append(imported)
        save_records(self.store, IMPORTED_SCRIPTS_KEY, imported_scripts)
        logger.info("Imported script %s into project %s as %s", script_id, project_id, imported.id)
        return imported

    def update_imported_script(
        self, imported_script_id: str, script_data: ImportedScriptUpdate
    ) -> None:
        """Merge execution fields. Any status may be set; no timestamp is bumped."""
        imported_scripts = self._all_imported_scripts()
        index = find_index(imported_scripts, imported_script_id)
        if index == -1:
            logger.debug("update_imported_script: no imported script %s", imported_script_id)
            return
        apply_patch(imported_scripts[index], script_data)
        save_records(self.store, IMPORTED_SCRIPTS_KEY, imported_scripts)

    def save_progress(
        self,
        imported_script_id: str,
        remarks: Optional[str],
        test_screenshots: Iterable[Screenshot],
    ) -> None:
        """Record execution notes; a pending script moves to in-progress."""
        imported = self.get_imported_script(imported_script_id)
        if imported is None:
            return
        status = "in-progress" if imported.status == "pending" else imported.status
        self.update_imported_script(
            imported_script_id,
            ImportedScriptUpdate(
                status=status,
                remarks=remarks,
                test_screenshots=list(test_screenshots),
            ),
        )

    def mark_complete(
        self,
        imported_script_id: str,
        remarks: Optional[str],
        test_screenshots: Iterable[Screenshot],
    ) -> None:
        self.update_imported_script(
            imported_script_id,
            ImportedScriptUpdate(
                status="completed",
                remarks=remarks,
                test_screenshots=list(test_screenshots),
                completed_at=utc_now(),
            ),
        )
