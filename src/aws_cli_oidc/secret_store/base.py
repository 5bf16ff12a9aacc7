"""Secret blob store abstractions.

Secrets are single opaque strings addressed by a (service, account) pair and
live in the OS credential store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class SecretStoreError(RuntimeError):
    """Raised when the secret store fails to serve a request."""


class SecretNotFoundError(SecretStoreError):
    """Raised when no secret exists for the (service, account) pair."""

    def __init__(self, service: str, account: str) -> None:
        super().__init__(f"secret not found: service={service}, account={account}")
        self.service = service
        self.account = account


class SecretBlobStore(ABC):
    """Credential store interface."""

    @abstractmethod
    def get(self, service: str, account: str) -> str:
        """Return the secret or raise SecretNotFoundError / SecretStoreError."""

    @abstractmethod
    def set(self, service: str, account: str, value: str) -> None:
        """Create or replace the secret."""

    @abstractmethod
    def delete(self, service: str, account: str) -> None:
        """Delete the secret or raise SecretNotFoundError / SecretStoreError."""
