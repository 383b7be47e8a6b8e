from __future__ import annotations

import io
import json

import pytest

from mypos_client.telemetry import TelemetryLogger, build_event, telemetry_enabled_from_env


def test_build_event_rejects_customer_data() -> None:
    with pytest.raises(ValueError, match="customer_name"):
        build_event(category="sale", name="sale_checkout", module="pos", action="checkout", context={"customer_name": "Ana"})


def test_build_event_rejects_unknown_category() -> None:
    with pytest.raises(ValueError):
        build_event(category="metrics", name="x", module="pos", action="x")


def test_disabled_by_default(tmp_path) -> None:
    logger = TelemetryLogger(log_file=tmp_path / "events.jsonl")
    assert not telemetry_enabled_from_env()
    assert not logger.emit(build_event(category="shift", name="shift_open_shift", module="shifts", action="open_shift"))
    assert not (tmp_path / "events.jsonl").exists()


def test_env_flag_enables_jsonl_output(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("MYPOS_TELEMETRY_ENABLED", "yes")
    stream = io.StringIO()
    logger = TelemetryLogger(app_name="terminal", log_file=tmp_path / "events.jsonl", stdout_stream=stream)
    assert logger.emit(build_event(category="auth", name="login", module="auth", action="login", success=True))
    line = json.loads((tmp_path / "events.jsonl").read_text())
    assert line["app_name"] == "terminal"
    assert line["success"] is True
    assert json.loads(stream.getvalue()) == line


def test_write_failure_is_logged_not_raised(tmp_path, caplog: pytest.LogCaptureFixture) -> None:
    logger = TelemetryLogger(enabled=True, log_file=tmp_path)
    event = build_event(category="sale", name="sale_checkout", module="pos", action="checkout", success=True)

    with caplog.at_level("WARNING", logger="mypos_client.telemetry"):
        assert logger.emit(event) is False

    assert "telemetry_write_failed" in caplog.messages
