from __future__ import annotations

from pathlib import Path

import pytest
from fakes import ExclusiveLocker, InMemoryBlobStore

from aws_cli_oidc import config
from aws_cli_oidc.config import CacheSettings, Settings


@pytest.fixture
def store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def locker() -> ExclusiveLocker:
    return ExclusiveLocker()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(cache=CacheSettings(lock_dir=str(tmp_path / "locks")))


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(config, "load_dotenv", lambda **_: None)
    for key in config.ENV_KEYS.values():
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("AWS_CLI_OIDC_LOCK_DIR", str(tmp_path / "env-locks"))
    config._load_settings_cached.cache_clear()
    yield
    config._load_settings_cached.cache_clear()
