"""Tests for enrich.py — per-workflow summaries with fake sources."""

from __future__ import annotations

from git_workflow_capture.classifier import WorkflowType
from git_workflow_capture.enrich import build_event


class TestCommit:
    def test_full_summary(self, make_envelope, fake_git, fake_github):
        env = make_envelope('git commit -m "feat: add caching"', " 3 files changed, 10 insertions(+)")
        git = fake_git(subject="feat: add caching", branch="main")

        event = build_event(WorkflowType.COMMIT, env, git, fake_github())

        assert event.content == "Committed to myproject: feat: add caching on main (3 files)"
        assert event.extra_tags == ("commit",)
        assert event.subject == "feat: add caching"

    def test_missing_fields(self, make_envelope, fake_git, fake_github):
        event = build_event(WorkflowType.COMMIT, make_envelope("git commit"), fake_git(), fake_github())
        assert event.content == "Committed to myproject: unknown"

    def test_merge_commit_skipped(self, make_envelope, fake_git, fake_github):
        git = fake_git(subject="feat: looks important", parents=2)
        assert build_event(WorkflowType.COMMIT, make_envelope("git commit"), git, fake_github()) is None


class TestIssues:
    def test_create_with_url(self, make_envelope, fake_git, fake_github):
        env = make_envelope(
            'gh issue create --title "Crash on start" --body "..."',
            "https://github.com/o/r/issues/31\n",
        )
        event = build_event(WorkflowType.ISSUE_CREATE, env, fake_git(), fake_github())
        assert event.content == (
            "Created issue #31 in myproject: Crash on start - https://github.com/o/r/issues/31"
        )
        assert event.extra_tags == ("issue", "created")

    def test_create_without_details(self, make_envelope, fake_git, fake_github):
        event = build_event(WorkflowType.ISSUE_CREATE, make_envelope("gh issue create"), fake_git(), fake_github())
        assert event.content == "Created issue #? in myproject: see URL"

    def test_close(self, make_envelope, fake_git, fake_github):
        event = build_event(WorkflowType.ISSUE_CLOSE, make_envelope("gh issue close 15"), fake_git(), fake_github())
        assert event.content == "Closed issue #15 in myproject"
        assert event.extra_tags == ("issue", "closed")

    def test_close_without_number(self, make_envelope, fake_git, fake_github):
        event = build_event(WorkflowType.ISSUE_CLOSE, make_envelope("gh issue close"), fake_git(), fake_github())
        assert event.content == "Closed issue #? in myproject"


class TestPrMerge:
    def test_enriched(self, make_envelope, fake_git, fake_github):
        github = fake_github(title="Add retry logic", body="Closes #7\nfixes #3")
        git = fake_git(remote="https://github.com/acme/widgets.git")

        event = build_event(WorkflowType.PR_MERGE, make_envelope("gh pr merge 42 --squash"), git, github)

        assert event.content == "Merged PR #42 in myproject: Add retry logic (closes #3,7)"
        assert event.extra_tags == ("pr", "merged")
        assert ("title", "42", "acme/widgets") in github.calls
        assert ("body", "42", "acme/widgets") in github.calls

    def test_number_from_output(self, make_envelope, fake_git, fake_github):
        github = fake_github(title="Add retry logic")
        git = fake_git(remote="git@github.com:acme/widgets.git")
        env = make_envelope("gh pr merge --squash", "✓ Squashed and merged pull request #42")

        event = build_event(WorkflowType.PR_MERGE, env, git, github)

        assert event.content == "Merged PR #42 in myproject: Add retry logic"

    def test_no_remote_skips_lookups(self, make_envelope, fake_git, fake_github):
        github = fake_github(title="never used")
        event = build_event(WorkflowType.PR_MERGE, make_envelope("gh pr merge 42"), fake_git(), github)

        assert event.content == "Merged PR #42 in myproject"
        assert github.calls == []

    def test_no_number_skips_lookups(self, make_envelope, fake_git, fake_github):
        github = fake_github(title="never used")
        git = fake_git(remote="https://github.com/acme/widgets")
        event = build_event(WorkflowType.PR_MERGE, make_envelope("gh pr merge"), git, github)

        assert event.content == "Merged PR #? in myproject"
        assert github.calls == []

    def test_failed_lookups_degrade(self, make_envelope, fake_git, fake_github):
        git = fake_git(remote="https://github.com/acme/widgets")
        event = build_event(WorkflowType.PR_MERGE, make_envelope("gh pr merge 9"), git, fake_github())
        assert event.content == "Merged PR #9 in myproject"


class TestPrReview:
    def test_approved(self, make_envelope, fake_git, fake_github):
        env = make_envelope("gh pr view 7", "reviewers: bob (Approved)")
        event = build_event(WorkflowType.PR_REVIEW, env, fake_git(), fake_github())
        assert event.content == "PR #7 review in myproject: approved"
        assert event.extra_tags == ("pr", "review")

    def test_changes_requested(self, make_envelope, fake_git, fake_github):
        env = make_envelope("gh pr view 7", "alice requested changes")
        event = build_event(WorkflowType.PR_REVIEW, env, fake_git(), fake_github())
        assert event.content == "PR #7 review in myproject: changes requested"

    def test_api(self, make_envelope, fake_git, fake_github):
        env = make_envelope("gh api repos/o/r/pulls/88/comments", '[{"body": "nit"}]')
        event = build_event(WorkflowType.PR_REVIEW_API, env, fake_git(), fake_github())
        assert event.content == "Fetched PR #88 review data in myproject"
        assert event.extra_tags == ("pr", "review", "api")


class TestUnknown:
    def test_returns_none(self, make_envelope, fake_git, fake_github):
        assert build_event(WorkflowType.UNKNOWN, make_envelope("ls"), fake_git(), fake_github()) is None
