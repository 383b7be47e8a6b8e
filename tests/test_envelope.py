from __future__ import annotations

import pytest

from mypos_client.envelope import parse_model, unwrap
from mypos_client.exceptions import ApiError, ResponseShapeError
from mypos_client.models import LoginResponse
from mypos_client.models_catalog import Product


def test_unwrap_returns_typed_data() -> None:
    products = unwrap(
        {"success": True, "data": [{"product_id": 3, "title": "Cafe", "price": "2500"}]},
        list[Product],
        operation="search",
    )
    assert products[0].id == 3
    assert products[0].name == "Cafe"
    assert str(products[0].price) == "2500"


def test_unwrap_rejects_bare_list() -> None:
    with pytest.raises(ResponseShapeError) as exc:
        unwrap([{"id": 1, "name": "Cafe"}], list[Product], operation="search")
    assert exc.value.code == "RESPONSE_SHAPE"


def test_unwrap_rejects_missing_data() -> None:
    with pytest.raises(ResponseShapeError):
        unwrap({"success": True, "message": "ok"}, list[Product])


def test_unwrap_rejects_wrong_item_shape() -> None:
    with pytest.raises(ResponseShapeError):
        unwrap({"success": True, "data": [{"sku": "x"}]}, list[Product])


def test_unwrap_success_false_is_api_error() -> None:
    with pytest.raises(ApiError) as exc:
        unwrap({"success": False, "data": None, "message": "Cupon invalido"}, Product | None)
    assert exc.value.message == "Cupon invalido"
    assert not isinstance(exc.value, ResponseShapeError)


def test_parse_model_login_shape() -> None:
    with pytest.raises(ResponseShapeError):
        parse_model({"token": "abc"}, LoginResponse, operation="login")
