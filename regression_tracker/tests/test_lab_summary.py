"""
Tests for the test lab overview of a project.
"""

import pytest

from regression_tracker.schemas import ScriptCreate
from regression_tracker.services.collection_store import InMemoryCollectionStore
from regression_tracker.services.lab_summary import display_state, summarize_test_lab
from regression_tracker.workspace import RegressionWorkspace


@pytest.fixture(scope="function")
def workspace():
    return RegressionWorkspace(InMemoryCollectionStore())


def _import_scripts(workspace, count: int):
    """Helper to import ``count`` catalog scripts into one project."""
    project = workspace.add_project("Wave 1", "user01")
    imported = []
    for i in range(count):
        script = workspace.add_script(ScriptCreate(
            script_id=f"HR-{i:03d}",
            short_description=f"Payroll step {i}",
            test_environment="Online",
            test_type="Positive",
            purpose="Payroll run",
            expected_results="Run succeeds",
            script_details="1. Start payroll",
            subfolder_id="folder_sub",
        ))
        imported.append(workspace.import_script(script.id, project.id))
    return project, imported


class TestLabSummary:
    """Tests for grouping imported scripts into lab tabs."""

    def test_buckets_and_display_states(self, workspace):
        project, (pending, in_progress, completed, blocked, fixed_only) = _import_scripts(workspace, 5)

        workspace.save_progress(in_progress.id, "halfway", [])
        workspace.mark_complete(completed.id, "ok", [])
        workspace.raise_issue(blocked.id, "Blocked", "Cannot start")
        issue = workspace.raise_issue(fixed_only.id, "Minor", "Typo")
        workspace.mark_issue_fixed(issue.id, "Typo fixed")

        summary = workspace.lab_overview(project.id)

        assert len(summary.all_scripts) == 5
        assert [s.id for s in summary.completed] == [completed.id]
        assert {s.id for s in summary.pending} == {
            pending.id, in_progress.id, blocked.id, fixed_only.id,
        }
        assert [s.id for s in summary.with_issues] == [blocked.id]
        assert summary.display_states == {
            pending.id: "pending",
            in_progress.id: "in-progress",
            completed.id: "completed",
            blocked.id: "has-issues",
            fixed_only.id: "pending",
        }

    def test_completed_wins_over_open_issues(self, workspace):
        project, (script,) = _import_scripts(workspace, 1)
        workspace.raise_issue(script.id, "Still open", "x")
        workspace.mark_complete(script.id, "done anyway", [])

        scripts = workspace.get_imported_scripts(project.id)
        issues = workspace.get_issues(project.id)
        assert display_state(scripts[0], issues) == "completed"
        assert summarize_test_lab(scripts, issues).with_issues == []

    def test_empty_project(self, workspace):
        summary = summarize_test_lab([], [])
        assert summary.all_scripts == []
        assert summary.display_states == {}
