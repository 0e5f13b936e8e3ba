"""Named extraction rules for free-form git/gh command text and output.

Each rule is a small function returning the extracted value or None, so a
change in upstream CLI output only touches one rule.
"""

from __future__ import annotations

import re

_FILES_CHANGED = re.compile(r"(\d+) files? changed")
_ISSUE_TITLE = re.compile(r"""--title ["']([^"']+)""")
_GITHUB_URL = re.compile(r"(https://github\.com/\S+)")
_TRAILING_NUMBER = re.compile(r"(\d+)$")
_HASH_NUMBER = re.compile(r"#(\d+)")
_PULLS_NUMBER = re.compile(r"pulls/(\d+)")
_REPO_SLUG = re.compile(r"[:/]([^/]+/[^/.]+?)(?:\.git)?$")
_LINKED_ISSUE = re.compile(r"(?:closes?|fixes?|resolves?)\s+#(\d+)", re.IGNORECASE)
_APPROVED = re.compile(r"approved", re.IGNORECASE)


def files_changed(output: str) -> str | None:
    """``3 files changed`` -> ``"3"``."""
    match = _FILES_CHANGED.search(output or "")
    return match.group(1) if match else None


def issue_title(command: str) -> str | None:
    """Value of a single- or double-quoted ``--title`` argument."""
    match = _ISSUE_TITLE.search(command or "")
    return match.group(1) if match else None


def first_github_url(output: str) -> str | None:
    match = _GITHUB_URL.search(output or "")
    return match.group(1) if match else None


def trailing_number(text: str) -> str | None:
    """Trailing digits, e.g. the issue number at the end of an issue URL."""
    match = _TRAILING_NUMBER.search(text or "")
    return match.group(1) if match else None


def number_after(keyword: str, text: str) -> str | None:
    """Number following ``keyword``, e.g. ``number_after("close", "gh issue close 15")``."""
    pattern = re.compile(rf"{re.escape(keyword)}\s+#?(\d+)")
    match = pattern.search(text or "")
    return match.group(1) if match else None


def first_hash_number(text: str) -> str | None:
    match = _HASH_NUMBER.search(text or "")
    return match.group(1) if match else None


def pulls_number(command: str) -> str | None:
    """PR number from a ``repos/o/r/pulls/<n>/...`` API path."""
    match = _PULLS_NUMBER.search(command or "")
    return match.group(1) if match else None


def repo_slug(remote_url: str) -> str | None:
    """``owner/repo`` from an https or ssh remote URL."""
    match = _REPO_SLUG.search((remote_url or "").strip())
    return match.group(1) if match else None


def linked_issues(body: str) -> str | None:
    """Issue numbers closed by a PR body, deduplicated and comma-joined.

    Matches ``close(s)``, ``fixe(s)`` or ``resolve(s)`` followed by ``#<n>``.
    Numbers are sorted as strings, so ``12`` comes before ``3``.
    """
    numbers = sorted(set(_LINKED_ISSUE.findall(body or "")))
    if not numbers:
        return None
    return ",".join(numbers)


def review_verdict(output: str) -> str:
    """``approved`` wins over ``changes requested``."""
    if _APPROVED.search(output or ""):
        return "approved"
    return "changes requested"
