# Services package

from .collection_store import (
    CollectionStore,
    InMemoryCollectionStore,
    SqlCollectionStore,
    load_records,
    save_records,
)
from .folder_tree import FolderHierarchy, build_folder_tree
from .script_catalog import ScriptCatalog, clean_assumptions, filter_scripts, new_screenshot
from .project_service import ProjectManager
from .issue_tracker import IssueTracker, describe_linked_scripts, open_issues_for_script
from .lab_summary import summarize_test_lab

__all__ = [
    "CollectionStore",
    "InMemoryCollectionStore",
    "SqlCollectionStore",
    "load_records",
    "save_records",
    "FolderHierarchy",
    "build_folder_tree",
    "ScriptCatalog",
    "clean_assumptions",
    "filter_scripts",
    "new_screenshot",
    "ProjectManager",
    "IssueTracker",
    "describe_linked_scripts",
    "open_issues_for_script",
    "summarize_test_lab",
]
