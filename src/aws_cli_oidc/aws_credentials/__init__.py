"""AWS credential cache."""

from aws_cli_oidc.aws_credentials.cache import CredentialCache, new_credential_cache
from aws_cli_oidc.aws_credentials.models import AWSCredentials, CacheDocument

__all__ = [
    "AWSCredentials",
    "CacheDocument",
    "CredentialCache",
    "new_credential_cache",
]
