"""File-based lock provider rooted at a dedicated lock directory."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from filelock import FileLock, Timeout

from aws_cli_oidc.errors import FatalCacheError, LockError
from aws_cli_oidc.locking.base import LockHandle, LockProvider

logger = logging.getLogger(__name__)


def lock_file_name(name: str) -> str:
    """Map a lock name to a safe file name (alphanumeric/._-)."""
    safe = re.sub(r"[^a-zA-Z0-9._-]", "-", name)
    safe = re.sub(r"-+", "-", safe).strip("-.")
    return f"{safe or 'lock'}.lock"


class FileLocker(LockProvider):
    """Advisory locks backed by lock files in ``lock_dir``.

    The file lock backend only offers exclusive locks; shared requests are
    served exclusively.
    """

    def __init__(self, lock_dir: str | Path) -> None:
        self._lock_dir = Path(lock_dir)
        try:
            self._lock_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FatalCacheError(f"Can't setup lock dir: {self._lock_dir}") from exc
        if not self._lock_dir.is_dir():
            raise FatalCacheError(f"Can't setup lock dir: {self._lock_dir}")

    @property
    def lock_dir(self) -> Path:
        return self._lock_dir

    def path_for(self, name: str) -> Path:
        return self._lock_dir / lock_file_name(name)

    def acquire(self, name: str, *, shared: bool = False, timeout: float) -> LockHandle:
        path = self.path_for(name)
        if shared:
            logger.debug("Shared lock requested for %s, acquiring exclusively", name)
        lock = FileLock(str(path))
        try:
            lock.acquire(timeout=timeout)
        except Timeout as exc:
            raise LockError(
                f"Timed out after {timeout}s waiting for lock '{name}' ({path})"
            ) from exc
        except OSError as exc:
            raise LockError(f"Failed to acquire lock '{name}' ({path}): {exc}") from exc
        logger.debug("Acquired lock %s (%s)", name, path)
        return LockHandle(name=name, shared=shared, token=lock)

    def release(self, handle: LockHandle) -> None:
        lock = handle.token
        if not isinstance(lock, FileLock):
            raise LockError(f"Lock handle for '{handle.name}' was not issued by FileLocker")
        try:
            lock.release()
        except OSError as exc:
            raise LockError(f"Failed to release lock '{handle.name}': {exc}") from exc
        logger.debug("Released lock %s", handle.name)
