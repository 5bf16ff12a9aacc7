"""Keyring-backed AWS credential cache for aws-cli-oidc."""

__version__ = "0.1.0"
