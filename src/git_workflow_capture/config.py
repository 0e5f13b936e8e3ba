"""Environment-driven configuration for git-workflow-capture.

Reads all config from env vars with sensible defaults. A ``.env`` file is
loaded first but never overrides variables that are already set.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

_CLAUDE_DIR = Path.home() / ".claude"
DEFAULT_QUEUE_PATH = _CLAUDE_DIR / "scripts" / "memory-queue.jsonl"
DEFAULT_LOG_PATH = _CLAUDE_DIR / "logs" / "git-workflow.log"


@dataclass(frozen=True)
class CaptureConfig:
    queue_path: Path = DEFAULT_QUEUE_PATH
    log_path: Path = DEFAULT_LOG_PATH
    log_level: str = "INFO"
    lookup_timeout: float = 5.0
    required_tools: tuple[str, ...] = ("git",)
    enrich: bool = True
    max_content_len: int = 1500
    max_command_len: int = 500


def _bool_env(key: str, default: str = "false") -> bool:
    return os.environ.get(key, default).lower() in ("true", "1", "yes")


def _path_env(key: str, default: Path) -> Path:
    value = os.environ.get(key, "").strip()
    return Path(value).expanduser() if value else default


def _number_env(key: str, default: float, cast: type = float):
    raw = os.environ.get(key)
    if raw is None or not raw.strip():
        return cast(default)
    try:
        value = cast(raw)
    except ValueError:
        logger.warning("Invalid %s=%r, using default %s", key, raw, default)
        return cast(default)
    if value <= 0:
        logger.warning("Non-positive %s=%r, using default %s", key, raw, default)
        return cast(default)
    return value


def _tools_env(key: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.environ.get(key)
    if raw is None:
        return default
    return tuple(t.strip() for t in raw.split(",") if t.strip())


def build_config(env_file: str | os.PathLike | None = None) -> CaptureConfig:
    """Build the hook configuration from the environment.

    If ``env_file`` is given it is loaded (when present); otherwise
    python-dotenv searches for a ``.env`` the usual way.
    """
    if env_file is not None:
        if os.path.exists(env_file):
            load_dotenv(env_file, override=False)
    else:
        load_dotenv(override=False)

    return CaptureConfig(
        queue_path=_path_env("GIT_WORKFLOW_QUEUE_PATH", DEFAULT_QUEUE_PATH),
        log_path=_path_env("GIT_WORKFLOW_LOG_PATH", DEFAULT_LOG_PATH),
        log_level=os.environ.get("GIT_WORKFLOW_LOG_LEVEL", "INFO").upper(),
        lookup_timeout=_number_env("GIT_WORKFLOW_LOOKUP_TIMEOUT", 5.0),
        required_tools=_tools_env("GIT_WORKFLOW_REQUIRED_TOOLS", ("git",)),
        enrich=_bool_env("GIT_WORKFLOW_ENRICH", "true"),
        max_content_len=_number_env("GIT_WORKFLOW_MAX_CONTENT", 1500, int),
        max_command_len=_number_env("GIT_WORKFLOW_MAX_COMMAND", 500, int),
    )
