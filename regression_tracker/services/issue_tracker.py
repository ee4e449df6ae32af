"""
Issue tracker service.

Issues are numbered per project: each new issue gets one more than the
highest number already used in its project. Issues link to imported
scripts many-to-many; the link is recorded on both sides
(``Issue.script_ids`` and ``ImportedScript.issues``) and only
``add_issue``, ``raise_issue`` and ``link_issue`` change it.

The tracker does not police status transitions. The usual flow is
open -> fixed (with a resolution) -> reopened (resolution cleared) ->
fixed again, but any status can be written.
"""

import logging
from typing import Iterable, Optional

from ..schemas.issue import Issue, IssueCreate, IssueUpdate
from ..schemas.project import ImportedScript
from ..schemas.script import Screenshot
from .collection_store import (
    IMPORTED_SCRIPTS_KEY,
    ISSUES_KEY,
    CollectionStore,
    apply_patch,
    find_index,
    load_records,
    save_records,
)
from .identifiers import generate_id, next_timestamp, utc_now

logger = logging.getLogger(__name__)

UNKNOWN_SCRIPT = "Unknown Script"


def next_issue_number(issues: Iterable[Issue], project_id: str) -> int:
    """One past the highest issue number in ``project_id``, starting at 1."""
    return max((i.issue_number for i in issues if i.project_id == project_id), default=0) + 1


class IssueTracker:
    """Per-project issues and their links to imported scripts."""

    def __init__(self, store: CollectionStore):
        self.store = store

    def _all_issues(self) -> list[Issue]:
        return load_records(self.store, ISSUES_KEY, Issue)

    def get_issues(self, project_id: str) -> list[Issue]:
        return [i for i in self._all_issues() if i.project_id == project_id]

    def get_issue(self, issue_id: str) -> Optional[Issue]:
        for issue in self._all_issues():
            if issue.id == issue_id:
                return issue
        return None

    def add_issue(self, issue_data: IssueCreate) -> Issue:
        """
        Add an issue with the next number of its project.

        Every imported script listed in ``script_ids`` gets the new issue id
        appended to its ``issues``, so both sides of the link agree.
        Unknown script ids stay on the issue only.
        """
        issues = self._all_issues()
        now = utc_now()
        issue = Issue(
            **issue_data.model_dump(),
            id=generate_id("issue"),
            issue_number=next_issue_number(issues, issue_data.project_id),
            created_at=now,
            updated_at=now,
        )
        issues.append(issue)
        save_records(self.store, ISSUES_KEY, issues)
        logger.info("Added issue #%d (%s) to project %s", issue.issue_number, issue.id, issue.project_id)
        self._attach_to_scripts(issue.script_ids, issue.id)
        return issue

    def update_issue(self, issue_id: str, issue_data: IssueUpdate) -> None:
        """Merge fields and bump ``updated_at``. No transition rules are applied."""
        issues = self._all_issues()
        index = find_index(issues, issue_id)
        if index == -1:
            logger.debug("update_issue: no issue %s", issue_id)
            return
        issue = issues[index]
        apply_patch(issue, issue_data)
        issue.updated_at = next_timestamp(issue.updated_at)
        save_records(self.store, ISSUES_KEY, issues)

    def mark_fixed(self, issue_id: str, resolution: str) -> None:
        self.update_issue(issue_id, IssueUpdate(status="fixed", resolution=resolution))

    def reopen(self, issue_id: str) -> None:
        self.update_issue(issue_id, IssueUpdate(status="reopened", resolution=None))

    # Linking

    def _attach_to_scripts(self, imported_script_ids: Iterable[str], issue_id: str) -> None:
        targets = set(imported_script_ids)
        if not targets:
            return
        imported_scripts = load_records(self.store, IMPORTED_SCRIPTS_KEY, ImportedScript)
        changed = False
        for imported in imported_scripts:
            if imported.id in targets and issue_id not in imported.issues:
                imported.issues = [*imported.issues, issue_id]
                changed = True
        if changed:
            save_records(self.store, IMPORTED_SCRIPTS_KEY, imported_scripts)

    def raise_issue(
        self,
        imported_script_id: str,
        title: str,
        description: str,
        screenshots: Iterable[Screenshot] = (),
    ) -> Optional[Issue]:
        """
        Create an open issue against an imported script and link both ways.

        The issue lands in the script's project. Returns None, writing
        nothing, when the imported script is unknown.
        """
        imported_scripts = load_records(self.store, IMPORTED_SCRIPTS_KEY, ImportedScript)
        index = find_index(imported_scripts, imported_script_id)
        if index == -1:
            logger.debug("raise_issue: no imported script %s", imported_script_id)
            return None

        return self.add_issue(
            IssueCreate(
                title=title,
                description=description,
                status="open",
                project_id=imported_scripts[index].project_id,
                script_ids=[imported_script_id],
                screenshots=list(screenshots),
            )
        )

    def link_issue(self, issue_id: str, imported_script_id: str) -> bool:
        """
        Link an existing issue to an imported script on both sides.

        Returns:
            False, writing nothing, when either record is unknown.
        """
        issues = self._all_issues()
        index = find_index(issues, issue_id)
        if index == -1:
            logger.debug("link_issue: no issue %s", issue_id)
            return False
        imported_scripts = load_records(self.store, IMPORTED_SCRIPTS_KEY, ImportedScript)
        if find_index(imported_scripts, imported_script_id) == -1:
            logger.debug("link_issue: no imported script %s", imported_script_id)
            return False

        issue = issues[index]
        if imported_script_id not in issue.script_ids:
            issue.script_ids = [*issue.script_ids, imported_script_id]
            issue.updated_at = next_timestamp(issue.updated_at)
            save_records(self.store, ISSUES_KEY, issues)
        self._attach_to_scripts([imported_script_id], issue_id)
        return True


def open_issues_for_script(issues: Iterable[Issue], imported_script_id: str) -> list[Issue]:
    """Linked issues that are not fixed (open or reopened)."""
    return [
        i for i in issues
        if imported_script_id in i.script_ids and i.status != "fixed"
    ]


def describe_linked_scripts(issue: Issue, scripts: Iterable[ImportedScript]) -> str:
    """Comma-separated human script ids of the scripts an issue is linked to."""
    by_id = {s.id: s for s in scripts}
    return ", ".join(
        by_id[script_id].script.script_id if script_id in by_id else UNKNOWN_SCRIPT
        for script_id in issue.script_ids
    )
