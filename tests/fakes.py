"""In-memory collaborators for cache tests."""

from __future__ import annotations

import threading

from aws_cli_oidc.errors import LockError
from aws_cli_oidc.locking import LockHandle, LockProvider
from aws_cli_oidc.secret_store import SecretBlobStore, SecretNotFoundError, SecretStoreError


class InMemoryBlobStore(SecretBlobStore):
    """Dict-backed stand-in for the OS keyring."""

    def __init__(self) -> None:
        self.secrets: dict[tuple[str, str], str] = {}
        self.fail_get: SecretStoreError | None = None
        self.fail_set: SecretStoreError | None = None
        self.fail_delete: SecretStoreError | None = None
        self.get_calls = 0

    def get(self, service: str, account: str) -> str:
        self.get_calls += 1
        if self.fail_get is not None:
            raise self.fail_get
        try:
            return self.secrets[(service, account)]
        except KeyError:
            raise SecretNotFoundError(service, account) from None

    def set(self, service: str, account: str, value: str) -> None:
        if self.fail_set is not None:
            raise self.fail_set
        self.secrets[(service, account)] = value

    def delete(self, service: str, account: str) -> None:
        if self.fail_delete is not None:
            raise self.fail_delete
        if (service, account) not in self.secrets:
            raise SecretNotFoundError(service, account)
        del self.secrets[(service, account)]


class ExclusiveLocker(LockProvider):
    """Thread-level lock provider that records how many holders overlap."""

    def __init__(self) -> None:
        self._locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()
        self.holders = 0
        self.max_holders = 0
        self.acquired: list[str] = []
        self.released: list[str] = []
        self.fail_acquire = False
        self.fail_release = False

    def acquire(self, name: str, *, shared: bool = False, timeout: float) -> LockHandle:
        if self.fail_acquire:
            raise LockError(f"lock '{name}' is busy")
        with self._guard:
            lock = self._locks.setdefault(name, threading.Lock())
        if not lock.acquire(timeout=timeout):
            raise LockError(f"timed out waiting for '{name}'")
        with self._guard:
            self.holders += 1
            self.max_holders = max(self.max_holders, self.holders)
            self.acquired.append(name)
        return LockHandle(name=name, shared=shared, token=lock)

    def release(self, handle: LockHandle) -> None:
        if self.fail_release:
            raise LockError(f"can't release '{handle.name}'")
        with self._guard:
            self.holders -= 1
            self.released.append(handle.name)
        handle.token.release()
