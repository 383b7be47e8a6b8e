"""JSONL event log for checkout, shift and session outcomes.

Disabled unless ``MYPOS_TELEMETRY_ENABLED`` is truthy. Context dictionaries
must not carry customer or credential data; such keys are rejected.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, TextIO

logger = logging.getLogger(__name__)

TELEMETRY_CATEGORIES = {"auth", "sale", "shift", "parked_order", "api_call_result", "error"}
_FORBIDDEN_CONTEXT_KEYS = {
    "password",
    "token",
    "authorization",
    "email",
    "phone",
    "customer_name",
    "address",
    "nit",
}


@dataclass(frozen=True)
class TelemetryEvent:
    category: str
    name: str
    module: str
    action: str
    timestamp_utc: str
    duration_ms: int | None = None
    success: bool | None = None
    error_code: str | None = None
    context: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {key: value for key, value in asdict(self).items() if value is not None}


def build_event(
    *,
    category: str,
    name: str,
    module: str,
    action: str,
    duration_ms: int | None = None,
    success: bool | None = None,
    error_code: str | None = None,
    context: dict[str, Any] | None = None,
    now: datetime | None = None,
) -> TelemetryEvent:
    if category not in TELEMETRY_CATEGORIES:
        raise ValueError(f"Unsupported telemetry category: {category}")
    if context:
        illegal = sorted(key for key in context if key.lower() in _FORBIDDEN_CONTEXT_KEYS)
        if illegal:
            raise ValueError(f"PII-like keys are forbidden in telemetry context: {illegal}")
    return TelemetryEvent(
        category=category,
        name=name,
        module=module,
        action=action,
        timestamp_utc=(now or datetime.now(timezone.utc)).isoformat(),
        duration_ms=duration_ms,
        success=success,
        error_code=error_code,
        context=context,
    )


class TelemetryLogger:
    def __init__(
        self,
        *,
        app_name: str = "mypos",
        enabled: bool | None = None,
        log_file: str | Path | None = None,
        stdout_stream: TextIO | None = None,
    ) -> None:
        self.app_name = app_name
        self.enabled = enabled if enabled is not None else telemetry_enabled_from_env()
        self.log_file = Path(log_file) if log_file else Path("artifacts") / "telemetry" / f"{app_name}.jsonl"
        self.stdout_stream = stdout_stream

    def emit(self, event: TelemetryEvent) -> bool:
        if not self.enabled:
            return False
        payload = event.to_dict()
        payload["app_name"] = self.app_name
        line = json.dumps(payload, sort_keys=True, default=str)
        try:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            with self.log_file.open("a", encoding="utf-8") as fp:
                fp.write(f"{line}\n")
        except OSError as exc:
            logger.warning("telemetry_write_failed", extra={"log_file": str(self.log_file), "error": str(exc)})
            return False
        if self.stdout_stream is not None:
            self.stdout_stream.write(f"{line}\n")
            self.stdout_stream.flush()
        return True


def telemetry_enabled_from_env() -> bool:
    value = os.getenv("MYPOS_TELEMETRY_ENABLED", "0").strip().lower()
    return value in {"1", "true", "yes", "on"}
