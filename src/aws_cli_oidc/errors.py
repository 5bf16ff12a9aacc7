"""Error taxonomy for the keyring-backed credential cache."""

from __future__ import annotations


class CredentialCacheError(Exception):
    """Base class for recoverable credential cache failures."""

    code = "cache_error"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        if code is not None:
            self.code = code


class LockError(CredentialCacheError):
    """Raised when the cache lock could not be acquired."""

    code = "lock_error"


class StoreReadError(CredentialCacheError):
    code = "store_read_error"


class StoreWriteError(CredentialCacheError):
    code = "store_write_error"


class StoreDeleteError(CredentialCacheError):
    code = "store_delete_error"


class CorruptDataError(CredentialCacheError):
    """Raised when persisted data exists but cannot be decoded."""

    code = "corrupt_data"


class SerializationError(CredentialCacheError):
    code = "serialization_error"


class CredentialNotFoundError(CredentialCacheError):
    """Raised when no credential is cached for a role."""

    code = "not_found"

    def __init__(self, role_arn: str) -> None:
        super().__init__(f"Not found the credential for {role_arn}")
        self.role_arn = role_arn


class FatalCacheError(RuntimeError):
    """Raised when the lock or store environment is unusable.

    Not a ``CredentialCacheError``: callers must not catch-and-continue.
    The CLI turns it into a non-zero process exit.
    """
