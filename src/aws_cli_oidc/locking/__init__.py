"""Cross-process lock providers."""

from aws_cli_oidc.locking.base import LockHandle, LockProvider
from aws_cli_oidc.locking.file_locker import FileLocker, lock_file_name

__all__ = [
    "FileLocker",
    "LockHandle",
    "LockProvider",
    "lock_file_name",
]
