"""Named advisory lock abstractions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class LockHandle:
    """Token returned by a successful acquire, passed back to release."""

    name: str
    shared: bool = False
    token: Any = field(default=None, compare=False, repr=False)


class LockProvider(ABC):
    """Cross-process named lock.

    ``acquire`` raises ``LockError`` when the lock cannot be taken within
    ``timeout`` seconds. ``release`` raises ``LockError`` when the lock system
    fails to let go of a held lock.
    """

    @abstractmethod
    def acquire(self, name: str, *, shared: bool = False, timeout: float) -> LockHandle:
        """Block until the named lock is held or the timeout expires."""

    @abstractmethod
    def release(self, handle: LockHandle) -> None:
        """Release a lock previously returned by ``acquire``."""
