"""JSON documents on disk: locked reads and atomic replace-on-write."""

from __future__ import annotations

import json
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from loguru import logger

_path_locks: dict[Path, threading.RLock] = {}
_path_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    resolved = path.resolve()
    with _path_locks_guard:
        lock = _path_locks.get(resolved)
        if lock is None:
            lock = threading.RLock()
            _path_locks[resolved] = lock
        return lock


@contextmanager
def locked_path(path: Path) -> Iterator[None]:
    """Hold the in-process lock for ``path`` for a read-modify-write cycle."""
    lock = _lock_for(path)
    with lock:
        yield


def read_json_document(path: Path, default: Any) -> Any:
    """Load a JSON document, returning ``default`` when missing or unreadable."""
    if not path.exists():
        return default
    try:
        with locked_path(path):
            with path.open("r", encoding="utf-8") as fh:
                return json.load(fh)
    except (OSError, ValueError) as exc:
        logger.warning(f"Ignoring unreadable JSON document {path}: {exc}")
        return default


def write_json_document(path: Path, payload: Any, *, indent: int | None = 2) -> None:
    """Serialize ``payload`` next to ``path`` and move it into place."""
    text = json.dumps(payload, indent=indent, ensure_ascii=False)
    path.parent.mkdir(parents=True, exist_ok=True)
    with locked_path(path):
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, path)
        finally:
            if tmp_path.exists():
                try:
                    tmp_path.unlink()
                except OSError:
                    pass
