"""Input reader for the PostToolUse hook envelope."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

EXIT_CODE_ENV = "CLAUDE_EXIT_CODE"

# Keys checked, in order, when tool_response arrives as an object.
_RESPONSE_TEXT_KEYS = ("stdout", "stderr", "output")


@dataclass(frozen=True)
class EventEnvelope:
    command: str
    output: str
    cwd: str
    exit_status: int = 0

    @property
    def project(self) -> str:
        """Project name: basename of the working directory."""
        base = self.cwd or os.getcwd()
        return os.path.basename(os.path.normpath(base))


def read_exit_status(environ: dict[str, str] | None = None) -> int:
    """Read the observed command's exit status from the environment.

    Missing or unparsable means success.
    """
    env = os.environ if environ is None else environ
    raw = env.get(EXIT_CODE_ENV, "0").strip() or "0"
    try:
        return int(raw)
    except ValueError:
        logger.debug("Unparsable %s=%r, treating as success", EXIT_CODE_ENV, raw)
        return 0


def _response_text(response: Any) -> str:
    if response is None:
        return ""
    if isinstance(response, str):
        return response
    if isinstance(response, dict):
        parts = [
            response[key]
            for key in _RESPONSE_TEXT_KEYS
            if isinstance(response.get(key), str) and response[key]
        ]
        if parts:
            return "\n".join(parts)
    return json.dumps(response, ensure_ascii=False)


def parse_envelope(raw: str, exit_status: int = 0) -> EventEnvelope | None:
    """Parse the hook's stdin JSON. Returns None for empty or invalid input."""
    if not raw or not raw.strip():
        return None
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict):
        return None

    tool_input = data.get("tool_input") or {}
    command = tool_input.get("command", "") if isinstance(tool_input, dict) else ""
    cwd = data.get("cwd") or ""

    return EventEnvelope(
        command=command if isinstance(command, str) else "",
        output=_response_text(data.get("tool_response")),
        cwd=cwd if isinstance(cwd, str) else "",
        exit_status=exit_status,
    )
