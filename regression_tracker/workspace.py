"""
Regression workspace: the functional surface used by the UI layer.

Wires the folder, script, project and issue managers onto one injected
collection store and exposes their operations in one place.
"""

import logging
from typing import Iterable, Optional

from .schemas import (
    Folder,
    FolderUpdate,
    ImportedScript,
    ImportedScriptUpdate,
    Issue,
    IssueCreate,
    IssueUpdate,
    LabSummary,
    Project,
    Screenshot,
    Script,
    ScriptCreate,
    ScriptUpdate,
)
from .services.collection_store import CollectionStore
from .services.folder_tree import FolderHierarchy, build_folder_tree
from .services.issue_tracker import IssueTracker
from .services.lab_summary import summarize_test_lab
from .services.project_service import ProjectManager
from .services.script_catalog import ScriptCatalog, filter_scripts

logger = logging.getLogger(__name__)


class RegressionWorkspace:
    """All store operations over a single collection store."""

    def __init__(self, store: CollectionStore):
        self.store = store
        self.folders = FolderHierarchy(store)
        self.catalog = ScriptCatalog(store)
        self.projects = ProjectManager(store, self.catalog)
        self.issues = IssueTracker(store)

    # Folders

    def get_folders(self) -> list[Folder]:
        return self.folders.get_folders()

    def add_folder(self, name: str, parent_id: Optional[str] = None) -> Folder:
        return self.folders.add_folder(name, parent_id)

    def update_folder(self, folder_id: str, folder_data: FolderUpdate) -> None:
        self.folders.update_folder(folder_id, folder_data)

    def delete_folder(self, folder_id: str, cascade_scripts: bool = False) -> None:
        """
        Delete a folder and its direct subfolders.

        Scripts filed under the removed folders are left in the catalog,
        pointing at folders that no longer exist, unless
        ``cascade_scripts`` is set, in which case they are deleted too.
        """
        removed = self.folders.delete_folder(folder_id)
        if cascade_scripts and removed:
            self.catalog.delete_scripts_in_subfolders(removed)

    def get_root_folders(self) -> list[Folder]:
        return self.folders.get_root_folders()

    def get_subfolders(self, parent_id: str) -> list[Folder]:
        return self.folders.get_subfolders(parent_id)

    def describe_location(self, subfolder_id: str) -> tuple[str, str]:
        return self.folders.describe_location(subfolder_id)

    def folder_tree(self) -> list[dict]:
        return build_folder_tree(self.get_folders(), self.get_scripts())

    # Scripts

    def get_scripts(self) -> list[Script]:
        return self.catalog.get_scripts()

    def search_scripts(
        self, subfolder_id: Optional[str] = None, search: Optional[str] = None
    ) -> list[Script]:
        return filter_scripts(self.get_scripts(), subfolder_id=subfolder_id, search=search)

    def add_script(self, script_data: ScriptCreate) -> Script:
        return self.catalog.add_script(script_data)

    def update_script(self, script_id: str, script_data: ScriptUpdate) -> None:
        self.catalog.update_script(script_id, script_data)

    def delete_script(self, script_id: str) -> None:
        self.catalog.delete_script(script_id)

    # Projects and imports

    def get_projects(self, user_id: str) -> list[Project]:
        return self.projects.get_projects(user_id)

    def get_project(self, project_id: str) -> Optional[Project]:
        return self.projects.get_project(project_id)

    def add_project(self, name: str, user_id: str) -> Project:
        return self.projects.add_project(name, user_id)

    def get_imported_scripts(self, project_id: str) -> list[ImportedScript]:
        return self.projects.get_imported_scripts(project_id)

    def get_imported_script(self, imported_script_id: str) -> Optional[ImportedScript]:
        return self.projects.get_imported_script(imported_script_id)

    def imported_script_ids(self, project_id: str) -> set[str]:
        return self.projects.imported_script_ids(project_id)

    def import_script(self, script_id: str, project_id: str) -> Optional[ImportedScript]:
        return self.projects.import_script(script_id, project_id)

    def update_imported_script(
        self, imported_script_id: str, script_data: ImportedScriptUpdate
    ) -> None:
        self.projects.update_imported_script(imported_script_id, script_data)

    def save_progress(
        self, imported_script_id: str, remarks: Optional[str], test_screenshots: Iterable[Screenshot]
    ) -> None:
        self.projects.save_progress(imported_script_id, remarks, test_screenshots)

    def mark_complete(
        self, imported_script_id: str, remarks: Optional[str], test_screenshots: Iterable[Screenshot]
    ) -> None:
        self.projects.mark_complete(imported_script_id, remarks, test_screenshots)

    # Issues

    def get_issues(self, project_id: str) -> list[Issue]:
        return self.issues.get_issues(project_id)

    def get_issue(self, issue_id: str) -> Optional[Issue]:
        return self.issues.get_issue(issue_id)

    def add_issue(self, issue_data: IssueCreate) -> Issue:
        return self.issues.add_issue(issue_data)

    def update_issue(self, issue_id: str, issue_data: IssueUpdate) -> None:
        self.issues.update_issue(issue_id, issue_data)

    def raise_issue(
        self,
        imported_script_id: str,
        title: str,
        description: str,
        screenshots: Iterable[Screenshot] = (),
    ) -> Optional[Issue]:
        return self.issues.raise_issue(imported_script_id, title, description, screenshots)

    def link_issue(self, issue_id: str, imported_script_id: str) -> bool:
        return self.issues.link_issue(issue_id, imported_script_id)

    def mark_issue_fixed(self, issue_id: str, resolution: str) -> None:
        self.issues.mark_fixed(issue_id, resolution)

    def reopen_issue(self, issue_id: str) -> None:
        self.issues.reopen(issue_id)

    def lab_overview(self, project_id: str) -> LabSummary:
        return summarize_test_lab(self.get_imported_scripts(project_id), self.get_issues(project_id))
