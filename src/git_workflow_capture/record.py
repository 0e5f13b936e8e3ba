"""Content finalizer: assemble the queued memory record."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from git_workflow_capture.enrich import WorkflowEvent
from git_workflow_capture.envelope import EventEnvelope

logger = logging.getLogger(__name__)

DOMAIN_TAG = "git-workflow"
MEMORY_TYPE = "Context"
TRUNCATION_MARKER = "..."
MAX_CONTENT_LEN = 1500
MAX_COMMAND_LEN = 500


@dataclass(frozen=True)
class MemoryRecord:
    content: str
    tags: list[str]
    importance: float
    metadata: dict[str, str]
    timestamp: str
    type: str = MEMORY_TYPE

    def to_dict(self) -> dict[str, Any]:
        return {
            "content": self.content,
            "tags": list(self.tags),
            "importance": self.importance,
            "type": self.type,
            "metadata": dict(self.metadata),
            "timestamp": self.timestamp,
        }

    def to_json(self) -> str:
        """One compact JSON line, without the trailing newline."""
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))


def truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + TRUNCATION_MARKER


def build_tags(extra_tags: tuple[str, ...] | list[str], project: str) -> list[str]:
    """Domain tag first, ``repo:<project>`` last."""
    return [DOMAIN_TAG, *extra_tags, f"repo:{project}"]


def utc_timestamp(now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def finalize(
    event: WorkflowEvent,
    envelope: EventEnvelope,
    importance: float,
    now: datetime | None = None,
    max_content_len: int = MAX_CONTENT_LEN,
    max_command_len: int = MAX_COMMAND_LEN,
) -> MemoryRecord | None:
    """Build the record, or None if there is nothing meaningful to store."""
    content = event.content
    if not content or content == "unknown":
        logger.info("Skipping - no meaningful content extracted")
        return None

    if len(content) > max_content_len:
        logger.info("Truncating content from %d to %d chars", len(content), max_content_len)
        content = truncate(content, max_content_len)

    project = envelope.project
    return MemoryRecord(
        content=content,
        tags=build_tags(event.extra_tags, project),
        importance=importance,
        metadata={
            "workflow_type": event.workflow_type.value,
            "project": project,
            "command": truncate(envelope.command, max_command_len),
        },
        timestamp=utc_timestamp(now),
    )
