from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
import responses

from mypos_client.coupon_validation import normalize_coupon_code, validate_coupon
from mypos_client.exceptions import CouponRejectedError
from mypos_client.models_catalog import Coupon
from mypos_client.services import PosTerminal
from pos_helpers import envelope, url

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _coupon(**overrides) -> Coupon:
    payload = {
        "id": 5,
        "code": "PROMO10",
        "discount": 10,
        "is_active": True,
        "valid_until": "2024-12-31T23:59:59Z",
        "usage_limit": 100,
        "current_usage": 3,
    }
    payload.update(overrides)
    return Coupon.model_validate(payload)


def test_normalize_code() -> None:
    assert normalize_coupon_code("  promo10 ") == "PROMO10"


def test_valid_coupon() -> None:
    assert validate_coupon(_coupon(), now=NOW).ok


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"id": None}, "code"),
        ({"is_active": False}, "is_active"),
        ({"valid_until": "2024-04-30T00:00:00Z"}, "valid_until"),
        ({"current_usage": 100}, "usage_limit"),
    ],
)
def test_rejected_coupons(overrides: dict, field: str) -> None:
    result = validate_coupon(_coupon(**overrides), now=NOW)
    assert not result.ok
    assert result.issues[0].field == field


def test_usage_limit_ignored_when_unset() -> None:
    assert validate_coupon(_coupon(usage_limit=None, current_usage=1000), now=NOW).ok


def test_naive_expiry_is_treated_as_utc() -> None:
    coupon = _coupon(valid_until=(NOW - timedelta(hours=1)).replace(tzinfo=None).isoformat())
    assert not validate_coupon(coupon, now=NOW).ok


def test_blank_code_rejected_before_network(session) -> None:
    with pytest.raises(CouponRejectedError):
        PosTerminal(session).apply_coupon("   ")


@responses.activate
def test_apply_coupon_sets_discount(session) -> None:
    responses.add(
        responses.GET,
        url("/api/coupons/PROMO10"),
        json=envelope({"id": 5, "code": "PROMO10", "discount": 10, "is_active": True}),
    )
    terminal = PosTerminal(session)
    coupon = terminal.apply_coupon(" promo10")
    assert coupon.id == 5
    assert terminal.draft.discount_percentage == Decimal("10")
    assert terminal.draft.coupon_id == 5
    assert terminal.draft.coupon_code == "PROMO10"


@responses.activate
def test_unknown_coupon_rejected(session) -> None:
    responses.add(responses.GET, url("/api/coupons/NOPE"), json={"message": "Cupon no encontrado"}, status=404)
    terminal = PosTerminal(session)
    with pytest.raises(CouponRejectedError):
        terminal.apply_coupon("nope")
    assert terminal.draft.discount_percentage == 0


@responses.activate
def test_expired_coupon_not_applied(session) -> None:
    responses.add(
        responses.GET,
        url("/api/coupons/OLD"),
        json=envelope({"id": 6, "code": "OLD", "discount": 20, "is_active": True, "valid_until": "2020-01-01T00:00:00Z"}),
    )
    terminal = PosTerminal(session)
    with pytest.raises(CouponRejectedError, match="expired"):
        terminal.apply_coupon("old")
    assert terminal.draft.coupon_id is None
