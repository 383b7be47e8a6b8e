from __future__ import annotations

import json

import pytest
import requests
import responses

from mypos_client import ApiSession, load_config
from mypos_client.clients.pos_client import PosClient
from mypos_client.exceptions import AuthError, NotFoundError, PermissionError, ServerError, TransportError
from mypos_client.http_client import HttpClient
from mypos_client.models import SessionData
from pos_helpers import envelope, url


def _http() -> HttpClient:
    return HttpClient(load_config())


@responses.activate
def test_request_sends_device_ip_and_bearer_token() -> None:
    responses.add(responses.GET, url("/api/pos/categories"), json=envelope([]), status=200)
    PosClient(http=_http(), access_token="abc").get_categories()
    headers = responses.calls[0].request.headers
    assert headers["x-ip-address"] == "10.0.0.5"
    assert headers["Authorization"] == "Bearer abc"
    assert headers["Accept"] == "application/json"


@responses.activate
def test_device_ip_is_looked_up_once(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MYPOS_DEVICE_IP")
    responses.add(responses.GET, "https://api.ipify.org", json={"ip": "181.50.2.7"}, status=200)
    responses.add(responses.GET, url("/api/pos/categories"), json=envelope([]), status=200)
    client = PosClient(http=_http(), access_token="abc")
    client.get_categories()
    client.get_categories()
    lookups = [call for call in responses.calls if "ipify" in call.request.url]
    assert len(lookups) == 1
    assert responses.calls[-1].request.headers["x-ip-address"] == "181.50.2.7"


@responses.activate
def test_device_ip_lookup_failure_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MYPOS_DEVICE_IP")
    responses.add(responses.GET, "https://api.ipify.org", status=503)
    assert _http().device_address() == "0.0.0.0"


@responses.activate
def test_error_response_keeps_server_message() -> None:
    responses.add(
        responses.GET,
        url("/api/pos/orders/5"),
        json={"success": False, "message": "Orden no encontrada"},
        status=404,
    )
    http = _http()
    with pytest.raises(NotFoundError) as exc:
        PosClient(http=http, access_token="abc").get_order(5)
    assert exc.value.message == "Orden no encontrada"
    assert http.last_operation.operation == "order_detail"
    assert http.last_operation.result == "error"


@responses.activate
def test_mutations_are_not_retried(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MYPOS_RETRIES", "2")
    monkeypatch.setenv("MYPOS_RETRY_BACKOFF_SECONDS", "0")
    responses.add(responses.POST, url("/api/pos/orders/pause"), json={"message": "boom"}, status=500)
    http = HttpClient(load_config())
    with pytest.raises(ServerError):
        http.request("POST", "/api/pos/orders/pause", json_body={})
    assert len(responses.calls) == 1


@responses.activate
def test_reads_retry_on_server_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MYPOS_RETRIES", "1")
    monkeypatch.setenv("MYPOS_RETRY_BACKOFF_SECONDS", "0")
    responses.add(responses.GET, url("/api/pos/categories"), json={"message": "boom"}, status=502)
    responses.add(responses.GET, url("/api/pos/categories"), json=envelope([]), status=200)
    assert PosClient(http=HttpClient(load_config())).get_categories() == []
    assert len(responses.calls) == 2


@responses.activate
def test_transport_error_is_wrapped() -> None:
    responses.add(responses.GET, url("/api/pos/categories"), body=requests.ConnectionError("offline"))
    with pytest.raises(TransportError) as exc:
        PosClient(http=_http()).get_categories()
    assert exc.value.status_code == 0


@responses.activate
def test_invalid_json_body_is_transport_error() -> None:
    responses.add(responses.GET, url("/api/pos/categories"), body="<html>", status=200)
    with pytest.raises(TransportError) as exc:
        PosClient(http=_http()).get_categories()
    assert exc.value.code == "INVALID_JSON"


@pytest.mark.parametrize(("status", "expected"), [(401, AuthError), (403, PermissionError)])
@responses.activate
def test_unauthorized_response_clears_session(auth_store, status: int, expected: type[Exception]) -> None:
    auth_store.save(SessionData(token="stale", user=None, env_name="dev"))
    expired: list[Exception] = []
    session = ApiSession(config=load_config(), auth_store=auth_store, on_session_expired=expired.append)
    assert session.token == "stale"
    responses.add(responses.GET, url("/api/pos/shifts/active"), json={"message": "Token expirado"}, status=status)

    with pytest.raises(expected):
        session.shifts_client().get_active_shift()

    assert session.token is None
    assert auth_store.load() is None
    assert len(expired) == 1
    assert isinstance(expired[0], expected)


@responses.activate
def test_json_body_serializes_amounts_as_numbers(session) -> None:
    responses.add(responses.POST, url("/api/pos/shifts/open"), json=envelope({"id": 1, "cash_register_id": 2, "warehouse_id": 4}))
    session.shifts_client().open_shift({"cash_register_id": 2, "base_amount": "50000.50"})
    body = json.loads(responses.calls[0].request.body)
    assert body == {"cash_register_id": 2, "base_amount": 50000.5}
