"""OS secret storage backends."""

from aws_cli_oidc.secret_store.base import (
    SecretBlobStore,
    SecretNotFoundError,
    SecretStoreError,
)
from aws_cli_oidc.secret_store.keyring_store import KeyringBlobStore

__all__ = [
    "KeyringBlobStore",
    "SecretBlobStore",
    "SecretNotFoundError",
    "SecretStoreError",
]
