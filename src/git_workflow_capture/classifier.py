"""Gate and classifier: map a shell command to a workflow type."""

from __future__ import annotations

import re
import shutil
from enum import Enum


class WorkflowType(str, Enum):
    COMMIT = "commit"
    ISSUE_CREATE = "issue-create"
    ISSUE_CLOSE = "issue-close"
    PR_MERGE = "pr-merge"
    PR_REVIEW = "pr-review"
    PR_REVIEW_API = "pr-review-api"
    UNKNOWN = "unknown"


_CANDIDATE = re.compile(r"git commit|gh (?:issue|pr|api)", re.IGNORECASE)

# Ordered: first match wins.
_COMMAND_RULES: list[tuple[re.Pattern, WorkflowType]] = [
    (re.compile(r"git commit", re.IGNORECASE), WorkflowType.COMMIT),
    (re.compile(r"gh issue create", re.IGNORECASE), WorkflowType.ISSUE_CREATE),
    (re.compile(r"gh issue close", re.IGNORECASE), WorkflowType.ISSUE_CLOSE),
    (re.compile(r"gh pr merge", re.IGNORECASE), WorkflowType.PR_MERGE),
]

_PR_VIEW = re.compile(r"gh pr view", re.IGNORECASE)
_REVIEW_MARKERS = re.compile(r"approved|requested changes", re.IGNORECASE)

_PR_REVIEW_API = re.compile(r"gh api.*pulls.*(?:comments|reviews)", re.IGNORECASE)
_REVIEW_API_MARKERS = re.compile(r"body|comment|state", re.IGNORECASE)


def missing_tools(required: tuple[str, ...] | list[str]) -> list[str]:
    """Return the required executables that are not on PATH."""
    return [tool for tool in required if shutil.which(tool) is None]


def is_workflow_command(command: str) -> bool:
    """Cheap pre-filter: does the command look like a git/gh workflow call?"""
    return bool(command) and _CANDIDATE.search(command) is not None


def classify(command: str, output: str) -> WorkflowType:
    """Classify a command (and its output, for review events).

    Returns ``WorkflowType.UNKNOWN`` when nothing matches or when a PR view
    or API call carries no review signal.
    """
    for pattern, workflow_type in _COMMAND_RULES:
        if pattern.search(command):
            return workflow_type

    if _PR_VIEW.search(command):
        if _REVIEW_MARKERS.search(output or ""):
            return WorkflowType.PR_REVIEW
        return WorkflowType.UNKNOWN

    if _PR_REVIEW_API.search(command):
        if _REVIEW_API_MARKERS.search(output or ""):
            return WorkflowType.PR_REVIEW_API
        return WorkflowType.UNKNOWN

    return WorkflowType.UNKNOWN
