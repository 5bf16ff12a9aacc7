"""Keyring-backed credential cache guarded by a cross-process lock.

Every role's credential lives in one JSON document stored under a single
(service, account) secret. Writes are whole-document read-modify-write cycles
performed while holding the named lock, so concurrent CLI invocations that
cache different roles do not drop each other's entries.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from pydantic import ValidationError

from aws_cli_oidc.aws_credentials.models import AWSCredentials, CacheDocument
from aws_cli_oidc.config import Settings, load_settings
from aws_cli_oidc.errors import (
    CorruptDataError,
    CredentialNotFoundError,
    FatalCacheError,
    LockError,
    SerializationError,
    StoreDeleteError,
    StoreReadError,
    StoreWriteError,
)
from aws_cli_oidc.identity import current_user
from aws_cli_oidc.locking import FileLocker, LockProvider
from aws_cli_oidc.secret_store import (
    KeyringBlobStore,
    SecretBlobStore,
    SecretNotFoundError,
    SecretStoreError,
)

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TIMEOUT_SECONDS = 180.0


class CredentialCache:
    """Per-invocation view of the cached credentials for one provider."""

    def __init__(
        self,
        *,
        service: str,
        account: str,
        store: SecretBlobStore,
        locker: LockProvider,
        lock_name: str,
        lock_timeout_seconds: float = DEFAULT_LOCK_TIMEOUT_SECONDS,
    ) -> None:
        self._service = service
        self._account = account
        self._store = store
        self._locker = locker
        self._lock_name = lock_name
        self._lock_timeout_seconds = lock_timeout_seconds
        self._entries: dict[str, str] = {}

    @property
    def service(self) -> str:
        return self._service

    @property
    def account(self) -> str:
        return self._account

    @property
    def lock_name(self) -> str:
        return self._lock_name

    @property
    def entries(self) -> dict[str, str]:
        return dict(self._entries)

    def role_arns(self) -> list[str]:
        return sorted(self._entries)

    def load(self) -> None:
        """Replace the in-memory entries with the persisted document.

        A missing document is not an error and leaves the entries untouched.

        Raises:
            LockError: If the lock could not be acquired
            StoreReadError: If the secret store failed
            CorruptDataError: If the stored document cannot be decoded
        """
        with self._locked("load"):
            try:
                blob = self._store.get(self._service, self._account)
            except SecretNotFoundError:
                logger.debug("No cached credentials for %s", self._service)
                return
            except SecretStoreError as exc:
                raise StoreReadError(
                    f"can't load secret due to unexpected error: {exc}"
                ) from exc
            document = self._decode(blob)
            self._entries = dict(document.credentials)

    def get(self, role_arn: str) -> AWSCredentials:
        """Return the cached credential for ``role_arn`` without touching the store.

        Raises:
            CredentialNotFoundError: If nothing is cached for the role
            CorruptDataError: If the cached record cannot be decoded
        """
        raw = self._entries.get(role_arn)
        if raw is None:
            raise CredentialNotFoundError(role_arn)
        logger.info("Got credential from OS secret store for %s", role_arn)
        try:
            return AWSCredentials.model_validate_json(raw)
        except ValidationError as exc:
            raise CorruptDataError(
                f"can't load secret due to the broken data for {role_arn}: {exc}"
            ) from exc

    def save(self, role_arn: str, credential: str) -> None:
        """Merge one role's serialized credential into the persisted document.

        The document is re-read under the lock so entries written by other
        processes since ``load`` are preserved.

        Raises:
            LockError: If the lock could not be acquired
            CorruptDataError: If the stored document cannot be decoded
            SerializationError: If the merged document cannot be encoded
            StoreWriteError: If the secret store rejected the write
            FatalCacheError: If the store failed while re-reading
        """
        with self._locked("save"):
            try:
                blob: str | None = self._store.get(self._service, self._account)
            except SecretNotFoundError:
                blob = None
            except SecretStoreError as exc:
                raise FatalCacheError(
                    f"can't load secret due to unexpected error: {exc}"
                ) from exc

            if blob is not None:
                self._entries = dict(self._decode(blob).credentials)
            else:
                self._entries = {}

            merged = dict(self._entries)
            merged[role_arn] = credential
            try:
                payload = CacheDocument(credentials=merged).model_dump_json()
            except ValueError as exc:
                raise SerializationError(f"can't marshal data: {exc}") from exc

            try:
                self._store.set(self._service, self._account, payload)
            except SecretStoreError as exc:
                raise StoreWriteError(f"can't save secret: {exc}") from exc
            self._entries = merged
            logger.debug("Saved credential for %s in %s", role_arn, self._service)

    def clear(self) -> None:
        """Delete the persisted document and forget the in-memory entries.

        Raises:
            LockError: If the lock could not be acquired
            StoreDeleteError: If the secret store failed to delete
        """
        with self._locked("clear"):
            try:
                self._store.delete(self._service, self._account)
            except SecretNotFoundError:
                logger.debug("No cached credentials to clear for %s", self._service)
            except SecretStoreError as exc:
                raise StoreDeleteError(f"can't clear secret: {exc}") from exc
            self._entries = {}

    @contextmanager
    def _locked(self, operation: str) -> Iterator[None]:
        try:
            handle = self._locker.acquire(
                self._lock_name,
                shared=False,
                timeout=self._lock_timeout_seconds,
            )
        except LockError as exc:
            raise LockError(f"can't {operation} secret due to locked now: {exc}") from exc
        try:
            yield
        finally:
            try:
                self._locker.release(handle)
            except LockError as exc:
                raise FatalCacheError(f"can't unlock {self._lock_name}: {exc}") from exc

    def _decode(self, blob: str) -> CacheDocument:
        try:
            return CacheDocument.model_validate_json(blob)
        except ValidationError as exc:
            raise CorruptDataError(f"can't load secret due to broken data: {exc}") from exc


def new_credential_cache(
    provider_id: str,
    *,
    settings: Settings | None = None,
    store: SecretBlobStore | None = None,
    locker: LockProvider | None = None,
    account: str | None = None,
) -> CredentialCache:
    """Build the cache for ``provider_id`` with the OS keyring and file locks.

    Raises:
        ValueError: If ``provider_id`` is blank
        FatalCacheError: If the lock directory cannot be set up
    """
    if not provider_id or not provider_id.strip():
        raise ValueError("provider_id must not be blank")

    cache_settings = (settings or load_settings()).cache
    service = f"{cache_settings.namespace}/{provider_id}"
    if cache_settings.lock_per_service:
        lock_name = f"{cache_settings.lock_resource}/{provider_id}"
    else:
        lock_name = cache_settings.lock_resource

    return CredentialCache(
        service=service,
        account=account if account is not None else current_user(),
        store=store if store is not None else KeyringBlobStore(),
        locker=locker if locker is not None else FileLocker(cache_settings.lock_dir),
        lock_name=lock_name,
        lock_timeout_seconds=cache_settings.lock_timeout_seconds,
    )
