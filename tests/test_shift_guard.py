from __future__ import annotations

import json
from decimal import Decimal

import pytest
import responses

from mypos_client.exceptions import ShiftRequiredError
from mypos_client.sale_draft import SaleDraft
from mypos_client.services import ShiftGuard, ShiftServiceError
from mypos_client.services.shift_service import NO_SHIFT_WARNING
from pos_helpers import envelope, product, shift_payload, url

ACTIVE = url("/api/pos/shifts/active")


@responses.activate
def test_active_shift_not_found_means_none(session) -> None:
    responses.add(responses.GET, ACTIVE, json={"success": False, "message": "Sin turno"}, status=404)
    guard = ShiftGuard(session)
    assert guard.active_shift() is None
    with pytest.raises(ShiftRequiredError):
        guard.require_open_shift()


@responses.activate
def test_active_shift_other_errors_propagate(session) -> None:
    responses.add(responses.GET, ACTIVE, json={"message": "boom"}, status=500)
    with pytest.raises(ShiftServiceError):
        ShiftGuard(session).active_shift()


@responses.activate
def test_closed_shift_is_not_open(session) -> None:
    responses.add(responses.GET, ACTIVE, json=envelope(shift_payload(status="closed")))
    with pytest.raises(ShiftRequiredError):
        ShiftGuard(session).ensure_checkout_allowed()


@responses.activate
def test_warning_only_for_first_item(session) -> None:
    responses.add(responses.GET, ACTIVE, json={"message": "Sin turno"}, status=404)
    guard = ShiftGuard(session)
    draft = SaleDraft()
    assert guard.warn_if_no_shift(draft) == NO_SHIFT_WARNING
    draft.add_item(product(1))
    assert guard.warn_if_no_shift(draft) is None
    assert len(responses.calls) == 1


@responses.activate
def test_warning_swallows_lookup_failures(session) -> None:
    responses.add(responses.GET, ACTIVE, json={"message": "boom"}, status=503)
    assert ShiftGuard(session).warn_if_no_shift(SaleDraft()) is None


@responses.activate
def test_open_shift_posts_register_and_base(session) -> None:
    responses.add(responses.POST, url("/api/pos/shifts/open"), json=envelope(shift_payload()))
    shift = ShiftGuard(session).open_shift(2, Decimal("50000"))
    assert shift.is_open
    assert json.loads(responses.calls[0].request.body) == {"cash_register_id": 2, "base_amount": 50000.0}


@pytest.mark.parametrize(
    ("register", "base", "field"),
    [(None, Decimal("10"), "cash_register_id"), (2, None, "base_amount"), (2, Decimal("-1"), "base_amount")],
)
def test_open_shift_validates_before_network(session, register, base, field: str) -> None:
    with pytest.raises(ShiftServiceError, match=field):
        ShiftGuard(session).open_shift(register, base)


@pytest.mark.parametrize(
    ("counted", "difference", "kind"),
    [("160000", "10000", "overage"), ("140000", "-10000", "shortage"), ("150000", "0", "exact")],
)
@responses.activate
def test_preview_close_difference(session, counted: str, difference: str, kind: str) -> None:
    responses.add(responses.GET, ACTIVE, json=envelope(shift_payload(final_cash_expected=150000)))
    preview = ShiftGuard(session).preview_close(Decimal(counted))
    assert preview.expected == Decimal("150000")
    assert preview.difference == Decimal(difference)
    assert preview.kind == kind


@responses.activate
def test_preview_close_falls_back_to_base_amount(session) -> None:
    responses.add(responses.GET, ACTIVE, json=envelope(shift_payload(final_cash_expected=None, base_amount=50000)))
    preview = ShiftGuard(session).preview_close(Decimal("45000"))
    assert preview.expected == Decimal("50000")
    assert preview.kind == "shortage"


@responses.activate
def test_close_shift_sends_counted_cash(session) -> None:
    responses.add(responses.GET, ACTIVE, json=envelope(shift_payload(shift_id=7)))
    responses.add(
        responses.POST,
        url("/api/pos/shifts/7/close"),
        json=envelope(shift_payload(shift_id=7, status="closed", final_cash_real=152000, difference=2000)),
    )
    guard = ShiftGuard(session)
    closed = guard.close_shift(Decimal("152000"), notes="Cierre tarde")
    assert not closed.is_open
    assert guard.current is None
    body = json.loads(responses.calls[1].request.body)
    assert body == {"final_cash_real": 152000.0, "notes": "Cierre tarde"}


def test_close_shift_rejects_negative_count(session) -> None:
    with pytest.raises(ShiftServiceError, match="final_cash_real"):
        ShiftGuard(session).close_shift(Decimal("-5"))


@responses.activate
def test_history_and_registers(session) -> None:
    responses.add(
        responses.GET,
        url("/api/shifts/history/me"),
        json=envelope({"history": [shift_payload(status="closed")], "total": 1}),
    )
    responses.add(
        responses.GET,
        url("/api/pos/cash-registers"),
        json=envelope([{"id": 2, "name": "Caja 1"}, {"id": 3, "name": "Caja 2"}]),
    )
    guard = ShiftGuard(session)
    history = guard.history(limit=5)
    assert history.total == 1
    assert "limit=5" in responses.calls[0].request.url
    assert [register.name for register in guard.cash_registers()] == ["Caja 1", "Caja 2"]


@responses.activate
def test_shift_detail_accepts_opened_at_alias(session) -> None:
    payload = shift_payload(shift_id=7, status="closed")
    payload["opened_at"] = payload.pop("start_time")
    responses.add(responses.GET, url("/api/pos/shifts/7"), json=envelope(payload))
    shift = session.shifts_client().get_shift(7)
    assert shift.start_time is not None
    assert not shift.is_open
