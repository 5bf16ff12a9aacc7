"""Credential record and persisted cache document models."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, ConfigDict, Field


class AWSCredentials(BaseModel):
    """Temporary AWS credentials in the credential_process JSON shape."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    version: int = Field(default=1, alias="Version")
    access_key_id: str = Field(default="", alias="AccessKeyId")
    secret_access_key: str = Field(default="", alias="SecretAccessKey")
    session_token: str = Field(default="", alias="SessionToken")
    expiration: datetime | None = Field(default=None, alias="Expiration")

    def __repr__(self) -> str:
        expires = self.expiration.isoformat() if self.expiration else None
        return (
            f"AWSCredentials(access_key_id={self.access_key_id[:8]}***, "
            f"expiration={expires})"
        )

    def __str__(self) -> str:
        return repr(self)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)

    def is_expiring_soon(self, buffer_seconds: int) -> bool:
        if self.expiration is None:
            return False
        exp = self.expiration
        if exp.tzinfo is None:
            exp = exp.replace(tzinfo=timezone.utc)
        return exp <= datetime.now(timezone.utc) + timedelta(seconds=buffer_seconds)


class CacheDocument(BaseModel):
    """The whole blob persisted under one (service, account) pair.

    Values are credential records serialized by the caller and stored verbatim.
    """

    credentials: dict[str, str] = Field(default_factory=dict)
