"""Per-workflow extraction and enrichment into a summary event."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from git_workflow_capture import extractors
from git_workflow_capture.classifier import WorkflowType
from git_workflow_capture.envelope import EventEnvelope
from git_workflow_capture.sources import GitInfo, PullRequestLookup

logger = logging.getLogger(__name__)

WORKFLOW_TAGS: dict[WorkflowType, tuple[str, ...]] = {
    WorkflowType.COMMIT: ("commit",),
    WorkflowType.ISSUE_CREATE: ("issue", "created"),
    WorkflowType.ISSUE_CLOSE: ("issue", "closed"),
    WorkflowType.PR_MERGE: ("pr", "merged"),
    WorkflowType.PR_REVIEW: ("pr", "review"),
    WorkflowType.PR_REVIEW_API: ("pr", "review", "api"),
}


@dataclass
class WorkflowEvent:
    workflow_type: WorkflowType
    content: str
    extra_tags: tuple[str, ...] = ()
    # Commit subject line, used to refine commit importance.
    subject: str = ""


def _commit(envelope: EventEnvelope, git: GitInfo) -> WorkflowEvent | None:
    subject = git.head_subject()
    branch = git.current_branch()

    # Merge commits carry nothing worth remembering.
    if git.head_parent_count() > 1:
        logger.info("Skipping merge commit: %s", subject)
        return None

    files = extractors.files_changed(envelope.output)
    content = f"Committed to {envelope.project}: {subject or 'unknown'}"
    if branch:
        content += f" on {branch}"
    if files:
        content += f" ({files} files)"
    return WorkflowEvent(WorkflowType.COMMIT, content, subject=subject)


def _issue_create(envelope: EventEnvelope) -> WorkflowEvent:
    title = extractors.issue_title(envelope.command)
    url = extractors.first_github_url(envelope.output)
    number = extractors.trailing_number(url) if url else None

    content = f"Created issue #{number or '?'} in {envelope.project}: {title or 'see URL'}"
    if url:
        content += f" - {url}"
    return WorkflowEvent(WorkflowType.ISSUE_CREATE, content)


def _issue_close(envelope: EventEnvelope) -> WorkflowEvent:
    number = extractors.number_after("close", envelope.command)
    return WorkflowEvent(
        WorkflowType.ISSUE_CLOSE, f"Closed issue #{number or '?'} in {envelope.project}"
    )


def _pr_merge(
    envelope: EventEnvelope, git: GitInfo, github: PullRequestLookup
) -> WorkflowEvent:
    number = extractors.number_after("merge", envelope.command) or extractors.first_hash_number(
        envelope.output
    )

    title = ""
    closes = None
    if number:
        repo = extractors.repo_slug(git.remote_url())
        if repo:
            title = github.lookup_pr_title(number, repo)
            closes = extractors.linked_issues(github.lookup_pr_body(number, repo))
        else:
            logger.debug("No origin remote slug; skipping PR enrichment")

    content = f"Merged PR #{number or '?'} in {envelope.project}"
    if title:
        content += f": {title}"
    if closes:
        content += f" (closes #{closes})"
    return WorkflowEvent(WorkflowType.PR_MERGE, content)


def _pr_review(envelope: EventEnvelope) -> WorkflowEvent:
    number = extractors.number_after("view", envelope.command)
    verdict = extractors.review_verdict(envelope.output)
    return WorkflowEvent(
        WorkflowType.PR_REVIEW, f"PR #{number or '?'} review in {envelope.project}: {verdict}"
    )


def _pr_review_api(envelope: EventEnvelope) -> WorkflowEvent:
    number = extractors.pulls_number(envelope.command)
    return WorkflowEvent(
        WorkflowType.PR_REVIEW_API,
        f"Fetched PR #{number or '?'} review data in {envelope.project}",
    )


def build_event(
    workflow_type: WorkflowType,
    envelope: EventEnvelope,
    git: GitInfo,
    github: PullRequestLookup,
) -> WorkflowEvent | None:
    """Extract fields for ``workflow_type`` and build its summary.

    Returns None when the event should not be recorded (merge commits,
    unknown types).
    """
    if workflow_type is WorkflowType.COMMIT:
        event = _commit(envelope, git)
    elif workflow_type is WorkflowType.ISSUE_CREATE:
        event = _issue_create(envelope)
    elif workflow_type is WorkflowType.ISSUE_CLOSE:
        event = _issue_close(envelope)
    elif workflow_type is WorkflowType.PR_MERGE:
        event = _pr_merge(envelope, git, github)
    elif workflow_type is WorkflowType.PR_REVIEW:
        event = _pr_review(envelope)
    elif workflow_type is WorkflowType.PR_REVIEW_API:
        event = _pr_review_api(envelope)
    else:
        return None

    if event is not None:
        event.extra_tags = WORKFLOW_TAGS[workflow_type]
    return event
