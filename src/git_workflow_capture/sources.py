"""Read-only git and GitHub CLI lookups used for extraction and enrichment.

Every lookup is best-effort: a missing executable, a non-zero exit or a
timeout yields an empty string, never an exception.
"""

from __future__ import annotations

import logging
import os
import subprocess
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0


class LookupFailed(Exception):
    """Raised internally when an external CLI lookup cannot produce output."""


def _run(args: list[str], cwd: str | None, timeout: float) -> str:
    try:
        result = subprocess.run(
            args,
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except (OSError, subprocess.SubprocessError, UnicodeDecodeError) as exc:
        raise LookupFailed(f"{args[0]} {args[1]}: {exc}") from exc
    if result.returncode != 0:
        raise LookupFailed(
            f"{' '.join(args[:3])} exited {result.returncode}: {result.stderr.strip()[:200]}"
        )
    return result.stdout.strip()


def _best_effort(args: list[str], cwd: str | None, timeout: float) -> str:
    try:
        return _run(args, cwd, timeout)
    except LookupFailed as exc:
        logger.debug("Lookup failed: %s", exc)
        return ""


class GitInfo(Protocol):
    def head_subject(self) -> str: ...

    def current_branch(self) -> str: ...

    def head_parent_count(self) -> int: ...

    def remote_url(self) -> str: ...


class PullRequestLookup(Protocol):
    def lookup_pr_title(self, number: str, repo: str) -> str: ...

    def lookup_pr_body(self, number: str, repo: str) -> str: ...


class GitSource:
    """Queries the repository the observed command ran in."""

    def __init__(self, cwd: str = "", timeout: float = DEFAULT_TIMEOUT):
        # Fall back to the process cwd when the hook's cwd is unusable.
        self.cwd = cwd if cwd and os.path.isdir(cwd) else None
        self.timeout = timeout

    def _git(self, *args: str) -> str:
        return _best_effort(["git", *args], self.cwd, self.timeout)

    def head_subject(self) -> str:
        return self._git("log", "-1", "--pretty=%s")

    def current_branch(self) -> str:
        return self._git("branch", "--show-current")

    def head_parent_count(self) -> int:
        """Number of parents of HEAD; 0 when unknown."""
        line = self._git("rev-list", "--parents", "-n", "1", "HEAD")
        fields = line.split()
        return max(len(fields) - 1, 0)

    def remote_url(self) -> str:
        return self._git("remote", "get-url", "origin")


class GitHubSource:
    """PR metadata via the ``gh`` CLI."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        self.timeout = timeout

    def _pr_field(self, number: str, repo: str, field: str) -> str:
        if not number or not repo:
            return ""
        return _best_effort(
            ["gh", "pr", "view", number, "--repo", repo, "--json", field, "-q", f".{field}"],
            None,
            self.timeout,
        )

    def lookup_pr_title(self, number: str, repo: str) -> str:
        return self._pr_field(number, repo, "title")

    def lookup_pr_body(self, number: str, repo: str) -> str:
        return self._pr_field(number, repo, "body")


class NoPullRequestLookup:
    """Stand-in used when enrichment is disabled by configuration."""

    def lookup_pr_title(self, number: str, repo: str) -> str:
        return ""

    def lookup_pr_body(self, number: str, repo: str) -> str:
        return ""
