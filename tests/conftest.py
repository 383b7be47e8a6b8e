from __future__ import annotations

import pytest

from mypos_client import ApiSession, AuthStore, load_config
from pos_helpers import BASE_URL


@pytest.fixture(autouse=True)
def _client_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MYPOS_API_BASE_URL", BASE_URL)
    monkeypatch.setenv("MYPOS_DEVICE_IP", "10.0.0.5")
    monkeypatch.delenv("MYPOS_ENV", raising=False)
    monkeypatch.delenv("MYPOS_API_BASE_URL_DEV", raising=False)
    monkeypatch.delenv("MYPOS_TELEMETRY_ENABLED", raising=False)
    monkeypatch.delenv("MYPOS_RETRIES", raising=False)


@pytest.fixture
def auth_store(tmp_path) -> AuthStore:
    return AuthStore(base_dir=tmp_path)


@pytest.fixture
def session(auth_store: AuthStore) -> ApiSession:
    return ApiSession(config=load_config(), auth_store=auth_store, token="token")
