"""Shared test fixtures for git-workflow-capture."""

import os

import pytest

from git_workflow_capture.envelope import EventEnvelope


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep host settings from leaking into tests."""
    for key in list(os.environ):
        if key.startswith("GIT_WORKFLOW_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("CLAUDE_EXIT_CODE", raising=False)


class FakeGit:
    """In-memory stand-in for GitSource."""

    def __init__(self, subject="", branch="", parents=1, remote=""):
        self.subject = subject
        self.branch = branch
        self.parents = parents
        self.remote = remote

    def head_subject(self):
        return self.subject

    def current_branch(self):
        return self.branch

    def head_parent_count(self):
        return self.parents

    def remote_url(self):
        return self.remote


class FakeGitHub:
    """In-memory stand-in for GitHubSource that records its calls."""

    def __init__(self, title="", body=""):
        self.title = title
        self.body = body
        self.calls: list[tuple[str, str, str]] = []

    def lookup_pr_title(self, number, repo):
        self.calls.append(("title", number, repo))
        return self.title

    def lookup_pr_body(self, number, repo):
        self.calls.append(("body", number, repo))
        return self.body


@pytest.fixture
def make_envelope(tmp_path):
    project_dir = tmp_path / "myproject"
    project_dir.mkdir()

    def _make(command, output="", exit_status=0, cwd=None):
        return EventEnvelope(
            command=command,
            output=output,
            cwd=str(project_dir) if cwd is None else cwd,
            exit_status=exit_status,
        )

    return _make


@pytest.fixture
def fake_git():
    return FakeGit


@pytest.fixture
def fake_github():
    return FakeGitHub
