"""Append-only memory queue writer with an exclusive advisory lock."""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator

try:
    import fcntl
except ImportError:  # Windows
    fcntl = None

try:
    import msvcrt
except ImportError:  # POSIX
    msvcrt = None

logger = logging.getLogger(__name__)


def _lock(handle: IO[str]) -> None:
    if fcntl is not None:
        fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
    elif msvcrt is not None:
        handle.seek(0)
        msvcrt.locking(handle.fileno(), msvcrt.LK_LOCK, 1)


def _unlock(handle: IO[str]) -> None:
    if fcntl is not None:
        fcntl.flock(handle.fileno(), fcntl.LOCK_UN)
    elif msvcrt is not None:
        handle.seek(0)
        msvcrt.locking(handle.fileno(), msvcrt.LK_UNLCK, 1)


@contextmanager
def locked_append(path: Path) -> Iterator[IO[str]]:
    """Open ``path`` for append and hold an exclusive lock while in use.

    Blocks until the lock is granted.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a", encoding="utf-8") as handle:
        _lock(handle)
        try:
            yield handle
            handle.flush()
        finally:
            _unlock(handle)


def append_record(queue_path: str | os.PathLike | None, line: str) -> bool:
    """Append one serialized record to the queue.

    Returns False when the write was skipped (no path, empty record, or an
    OS error); never raises for those cases.
    """
    if not queue_path or not line:
        logger.debug("Queue path or record missing; skipping write")
        return False
    try:
        with locked_append(Path(queue_path)) as handle:
            handle.write(line.rstrip("\n") + "\n")
    except OSError as exc:
        logger.warning("Failed to write to memory queue %s: %s", queue_path, exc)
        return False
    return True
