"""Importance tiering for workflow events."""

from __future__ import annotations

import re

from git_workflow_capture.classifier import WorkflowType

DEFAULT_IMPORTANCE = 0.5

BASE_IMPORTANCE: dict[WorkflowType, float] = {
    WorkflowType.COMMIT: DEFAULT_IMPORTANCE,
    WorkflowType.ISSUE_CREATE: 0.6,
    WorkflowType.ISSUE_CLOSE: 0.5,
    # Merged PRs are the "work shipped" signal.
    WorkflowType.PR_MERGE: 0.8,
    WorkflowType.PR_REVIEW: 0.5,
    WorkflowType.PR_REVIEW_API: 0.5,
}

# Checked in order; only feat and fix accept a scope.
COMMIT_PREFIX_TIERS: list[tuple[re.Pattern, float]] = [
    (re.compile(r"^(?:feat|fix)[:(]"), 0.6),
    (re.compile(r"^(?:chore|docs|style|ci):"), 0.4),
    (re.compile(r"^(?:refactor|perf|test):"), 0.5),
]


def commit_importance(subject: str) -> float:
    """Importance of a commit from its conventional-commit prefix."""
    for pattern, value in COMMIT_PREFIX_TIERS:
        if pattern.match(subject or ""):
            return value
    return DEFAULT_IMPORTANCE


def score(workflow_type: WorkflowType, subject: str = "") -> float:
    """Importance in [0, 1] for a workflow event."""
    if workflow_type is WorkflowType.COMMIT:
        value = commit_importance(subject)
    else:
        value = BASE_IMPORTANCE.get(workflow_type, DEFAULT_IMPORTANCE)
    return min(max(value, 0.0), 1.0)
