"""PostToolUse hook pipeline: envelope -> gate -> classify -> enrich -> score -> queue.

Every path exits cleanly; diagnostics go only to the side-channel log file.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime

from git_workflow_capture.classifier import (
    WorkflowType,
    classify,
    is_workflow_command,
    missing_tools,
)
from git_workflow_capture.config import CaptureConfig, build_config
from git_workflow_capture.enrich import build_event
from git_workflow_capture.envelope import EventEnvelope, parse_envelope, read_exit_status
from git_workflow_capture.importance import score
from git_workflow_capture.memory_queue import append_record
from git_workflow_capture.record import MemoryRecord, finalize
from git_workflow_capture.sources import (
    GitHubSource,
    GitInfo,
    GitSource,
    NoPullRequestLookup,
    PullRequestLookup,
)

logger = logging.getLogger(__name__)

SUCCESS_MARKER = "Success"


def capture(
    envelope: EventEnvelope,
    config: CaptureConfig,
    git: GitInfo | None = None,
    github: PullRequestLookup | None = None,
    now: datetime | None = None,
) -> tuple[MemoryRecord | None, bool]:
    """Run the pipeline for one envelope.

    Returns ``(record, done)``: ``record`` is the queued record (or None) and
    ``done`` is True when the run reached a deliberate outcome (queued, or a
    merge commit skipped) rather than an early no-op.
    """
    if envelope.exit_status != 0:
        return None, False

    if not is_workflow_command(envelope.command):
        return None, False

    logger.info("Git workflow command detected: %s", envelope.command)

    workflow_type = classify(envelope.command, envelope.output)
    if workflow_type is WorkflowType.UNKNOWN:
        logger.debug("No review signal or matching rule for command")
        return None, False

    if git is None:
        git = GitSource(envelope.cwd, timeout=config.lookup_timeout)
    if github is None:
        github = (
            GitHubSource(timeout=config.lookup_timeout) if config.enrich else NoPullRequestLookup()
        )

    event = build_event(workflow_type, envelope, git, github)
    if event is None:
        # Only merge commits are skipped here; that is a completed run.
        return None, workflow_type is WorkflowType.COMMIT

    importance = score(event.workflow_type, event.subject)
    record = finalize(
        event,
        envelope,
        importance,
        now=now,
        max_content_len=config.max_content_len,
        max_command_len=config.max_command_len,
    )
    if record is None:
        return None, False

    if not append_record(config.queue_path, record.to_json()):
        return None, False

    logger.info(
        "Queued %s memory (importance=%s): %s",
        event.workflow_type.value,
        importance,
        record.content,
    )
    return record, True


def _log_level(name: str) -> int:
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _configure_logging(config: CaptureConfig) -> None:
    try:
        config.log_path.parent.mkdir(parents=True, exist_ok=True)
        logging.basicConfig(
            filename=str(config.log_path),
            level=_log_level(config.log_level),
            format="[%(asctime)s] %(levelname)s %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    except OSError:
        # No writable log location: stay silent rather than fail the host.
        logging.basicConfig(handlers=[logging.NullHandler()])


def run_hook(env_file: str | None = None) -> None:
    """Read the hook envelope from stdin, process it, always exit 0."""
    try:
        done = _run_pipeline(env_file)
    except Exception:
        logger.exception("Unexpected error while capturing git workflow")
        sys.exit(0)

    if done:
        print(SUCCESS_MARKER)
    sys.exit(0)


def _run_pipeline(env_file: str | None) -> bool:
    config = build_config(env_file)
    _configure_logging(config)

    missing = missing_tools(config.required_tools)
    if missing:
        for tool in missing:
            print(f"Warning: {tool} not installed - git workflow capture disabled", file=sys.stderr)
        return False

    envelope = parse_envelope(sys.stdin.read(), read_exit_status())
    if envelope is None:
        return False

    _record, done = capture(envelope, config)
    return done
