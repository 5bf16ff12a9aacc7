"""OS-native secret store adapter (Keychain, Credential Manager, Secret Service)."""

from __future__ import annotations

import logging

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from aws_cli_oidc.secret_store.base import (
    SecretBlobStore,
    SecretNotFoundError,
    SecretStoreError,
)

logger = logging.getLogger(__name__)


class KeyringBlobStore(SecretBlobStore):
    """Stores blobs through the active ``keyring`` backend."""

    def get(self, service: str, account: str) -> str:
        try:
            value = keyring.get_password(service, account)
        except KeyringError as exc:
            raise SecretStoreError(
                f"failed to read secret '{service}' for '{account}'"
            ) from exc
        if value is None:
            raise SecretNotFoundError(service, account)
        logger.debug("Read secret: service=%s, account=%s", service, account)
        return value

    def set(self, service: str, account: str, value: str) -> None:
        try:
            keyring.set_password(service, account, value)
        except KeyringError as exc:
            raise SecretStoreError(
                f"failed to write secret '{service}' for '{account}'"
            ) from exc
        logger.debug("Wrote secret: service=%s, account=%s", service, account)

    def delete(self, service: str, account: str) -> None:
        try:
            keyring.delete_password(service, account)
        except PasswordDeleteError as exc:
            # Backends report a missing entry with the same exception type.
            if self._is_missing(service, account):
                raise SecretNotFoundError(service, account) from exc
            raise SecretStoreError(
                f"failed to delete secret '{service}' for '{account}'"
            ) from exc
        except KeyringError as exc:
            raise SecretStoreError(
                f"failed to delete secret '{service}' for '{account}'"
            ) from exc
        logger.debug("Deleted secret: service=%s, account=%s", service, account)

    def _is_missing(self, service: str, account: str) -> bool:
        try:
            return keyring.get_password(service, account) is None
        except KeyringError:
            return False
