"""Per-file locks shared by every JSON repository instance in the process."""

from __future__ import annotations

import threading
from pathlib import Path

_FILE_LOCKS: dict[Path, threading.RLock] = {}
_FILE_LOCKS_GUARD = threading.Lock()


def lock_for(path: Path) -> threading.RLock:
    """Return the single writer lock for *path*."""
    with _FILE_LOCKS_GUARD:
        return _FILE_LOCKS.setdefault(path.resolve(), threading.RLock())
