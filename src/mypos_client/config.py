from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable

from dotenv import load_dotenv

DEFAULT_IP_LOOKUP_URL = "https://api.ipify.org?format=json"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 30.0
    retries: int = 0
    retry_backoff_seconds: float = 0.3
    max_connections: int = 10
    verify_ssl: bool = True
    device_ip: str | None = None
    ip_lookup_url: str = DEFAULT_IP_LOOKUP_URL
    search_debounce_ms: int = 500


def _require(values: dict[str, str | None], required: Iterable[str]) -> None:
    missing = [key for key in required if not values.get(key)]
    if missing:
        raise ConfigError(f"Missing required config values: {', '.join(missing)}")


def _coerce_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _read_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc


def _read_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected an integer, got {raw!r}") from exc


def _validate(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def load_config(env_file: str | None = None) -> ClientConfig:
    """Load config from environment with optional .env override."""
    load_dotenv(env_file)

    env_name = (os.getenv("MYPOS_ENV") or "dev").strip()
    env_key = env_name.upper()

    api_base_url = (
        (os.getenv(f"MYPOS_API_BASE_URL_{env_key}") or "").strip()
        or (os.getenv("MYPOS_API_BASE_URL") or "").strip()
    )

    timeout_seconds = _read_float("MYPOS_TIMEOUT_SECONDS", "30")
    _validate(
        timeout_seconds > 0,
        f"Invalid MYPOS_TIMEOUT_SECONDS: expected > 0, got {timeout_seconds}",
    )

    connect_timeout_seconds = _read_float(
        "MYPOS_CONNECT_TIMEOUT_SECONDS", str(min(timeout_seconds, 5.0))
    )
    _validate(
        connect_timeout_seconds > 0,
        f"Invalid MYPOS_CONNECT_TIMEOUT_SECONDS: expected > 0, got {connect_timeout_seconds}",
    )

    read_timeout_seconds = _read_float(
        "MYPOS_READ_TIMEOUT_SECONDS",
        str(max(timeout_seconds, connect_timeout_seconds)),
    )
    _validate(
        read_timeout_seconds > 0,
        f"Invalid MYPOS_READ_TIMEOUT_SECONDS: expected > 0, got {read_timeout_seconds}",
    )

    retries = _read_int("MYPOS_RETRIES", "0")
    _validate(retries >= 0, f"Invalid MYPOS_RETRIES: expected >= 0, got {retries}")

    retry_backoff_seconds = _read_float("MYPOS_RETRY_BACKOFF_SECONDS", "0.3")
    _validate(
        retry_backoff_seconds >= 0,
        f"Invalid MYPOS_RETRY_BACKOFF_SECONDS: expected >= 0, got {retry_backoff_seconds}",
    )

    max_connections = _read_int("MYPOS_MAX_CONNECTIONS", "10")
    _validate(
        max_connections >= 1,
        f"Invalid MYPOS_MAX_CONNECTIONS: expected >= 1, got {max_connections}",
    )

    search_debounce_ms = _read_int("MYPOS_SEARCH_DEBOUNCE_MS", "500")
    _validate(
        search_debounce_ms >= 0,
        f"Invalid MYPOS_SEARCH_DEBOUNCE_MS: expected >= 0, got {search_debounce_ms}",
    )

    verify_ssl = _coerce_bool(os.getenv("MYPOS_VERIFY_SSL"), True)
    device_ip = (os.getenv("MYPOS_DEVICE_IP") or "").strip() or None
    ip_lookup_url = (os.getenv("MYPOS_IP_LOOKUP_URL") or "").strip() or DEFAULT_IP_LOOKUP_URL

    values = {"MYPOS_API_BASE_URL": api_base_url}
    _require(values, ["MYPOS_API_BASE_URL"])

    return ClientConfig(
        env_name=env_name,
        api_base_url=api_base_url.rstrip("/"),
        connect_timeout_seconds=connect_timeout_seconds,
        read_timeout_seconds=read_timeout_seconds,
        retries=retries,
        retry_backoff_seconds=retry_backoff_seconds,
        max_connections=max_connections,
        verify_ssl=verify_ssl,
        device_ip=device_ip,
        ip_lookup_url=ip_lookup_url,
        search_debounce_ms=search_debounce_ms,
    )
