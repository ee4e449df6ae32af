"""
Test lab overview: groups a project's imported scripts by execution state.
"""

from ..schemas.issue import Issue
from ..schemas.lab import DisplayState, LabSummary
from ..schemas.project import ImportedScript
from .issue_tracker import open_issues_for_script


def display_state(script: ImportedScript, issues: list[Issue]) -> DisplayState:
    if script.status == "completed":
        return "completed"
    if open_issues_for_script(issues, script.id):
        return "has-issues"
    if script.status == "in-progress":
        return "in-progress"
    return "pending"


def summarize_test_lab(scripts: list[ImportedScript], issues: list[Issue]) -> LabSummary:
    """
    Build the lab tabs for one project.

    A script is "with issues" when it is not completed and at least one
    linked issue is still open or reopened.
    """
    return LabSummary(
        all_scripts=list(scripts),
        completed=[s for s in scripts if s.status == "completed"],
        pending=[s for s in scripts if s.status in ("pending", "in-progress")],
        with_issues=[
            s for s in scripts
            if s.status != "completed" and open_issues_for_script(issues, s.id)
        ],
        display_states={s.id: display_state(s, issues) for s in scripts},
    )
