from __future__ import annotations

import random
from decimal import Decimal

import pytest

from mypos_client.sale_draft import DEFAULT_CUSTOMER_ID, DEFAULT_CUSTOMER_NAME, SaleDraft
from pos_helpers import product


def test_cart_subtotal_and_merge_on_re_add() -> None:
    draft = SaleDraft()
    a = product(1, price=5000)
    b = product(2, price=3000)
    draft.add_item(a, 2)
    draft.add_item(b)
    assert draft.subtotal == Decimal("13000")

    draft.add_item(a, 1)

    assert len(draft.items) == 2
    assert draft.line(1).quantity == 3
    assert draft.total_items == 4
    assert draft.subtotal == Decimal("18000")


def test_add_item_snapshots_price() -> None:
    draft = SaleDraft()
    item = product(1, price=5000)
    draft.add_item(item)
    item.price = Decimal("9999")
    assert draft.line(1).unit_price == Decimal("5000")


def test_add_item_beyond_stock_applies_with_warning() -> None:
    draft = SaleDraft()
    change = draft.add_item(product(1, stock=2), 3)
    assert change.applied
    assert "2 units" in change.warning
    assert draft.line(1).quantity == 3


def test_add_item_without_inventory_tracking_never_warns() -> None:
    draft = SaleDraft()
    change = draft.add_item(product(1, stock=0, is_inventory_managed=False), 5)
    assert change.warning is None


def test_add_item_rejects_non_positive_quantity() -> None:
    with pytest.raises(ValueError):
        SaleDraft().add_item(product(1), 0)


def test_update_quantity_beyond_stock_is_not_applied() -> None:
    draft = SaleDraft()
    draft.add_item(product(1, stock=5), 2)
    change = draft.update_quantity(1, 6)
    assert not change.applied
    assert change.warning
    assert draft.line(1).quantity == 2

    assert draft.update_quantity(1, 5).applied
    assert draft.line(1).quantity == 5


@pytest.mark.parametrize("quantity", [0, -1])
def test_update_quantity_to_zero_removes_line(quantity: int) -> None:
    draft = SaleDraft()
    draft.add_item(product(1))
    assert draft.update_quantity(1, quantity).applied
    assert draft.line(1) is None
    assert draft.is_empty()


def test_remove_missing_item_is_noop() -> None:
    draft = SaleDraft()
    draft.add_item(product(1))
    draft.remove_item(42)
    assert len(draft.items) == 1


def test_line_discount_reduces_subtotal() -> None:
    draft = SaleDraft()
    draft.add_item(product(1, price=5000), 2)
    draft.line(1).discount = Decimal("1000")
    assert draft.subtotal == Decimal("9000")


def test_clear_cart_keeps_sale_metadata() -> None:
    draft = SaleDraft()
    draft.add_item(product(1))
    draft.set_customer("Ana", 12)
    draft.set_discount(Decimal("10"), 5, "PROMO10")
    draft.clear_cart()
    assert draft.items == []
    assert draft.customer_name == "Ana"
    assert draft.discount_percentage == Decimal("10")


def test_reset_sale_data_restores_defaults() -> None:
    draft = SaleDraft()
    draft.set_customer("Ana", 12)
    draft.set_order_type("Domicilio")
    draft.set_sale_name("Mesa 4")
    draft.set_discount(Decimal("10"), 5, "PROMO10")
    draft.reset_sale_data()
    assert (draft.customer_name, draft.customer_id) == (DEFAULT_CUSTOMER_NAME, DEFAULT_CUSTOMER_ID)
    assert draft.order_type is None
    assert draft.sale_name is None
    assert draft.discount_percentage == 0
    assert draft.coupon_id is None
    assert draft.coupon_code is None


def test_clear_discount_drops_coupon_together() -> None:
    draft = SaleDraft()
    draft.set_discount(Decimal("15"), 8, "VIP")
    draft.clear_discount()
    assert (draft.discount_percentage, draft.coupon_id, draft.coupon_code) == (0, None, None)


@pytest.mark.parametrize("percentage", ["-1", "100.01"])
def test_set_discount_out_of_range(percentage: str) -> None:
    with pytest.raises(ValueError):
        SaleDraft().set_discount(Decimal(percentage))


def test_random_mutations_keep_one_line_per_product() -> None:
    rng = random.Random(1234)
    draft = SaleDraft()
    catalog = [product(pid, price=1000 * pid, stock=None) for pid in range(1, 6)]
    for _ in range(300):
        choice = rng.choice(["add", "update", "remove"])
        item = rng.choice(catalog)
        if choice == "add":
            draft.add_item(item, rng.randint(1, 3))
        elif choice == "update":
            draft.update_quantity(item.id, rng.randint(-1, 6))
        else:
            draft.remove_item(item.id)
        ids = [line.product_id for line in draft.items]
        assert len(ids) == len(set(ids))
        assert all(line.quantity >= 1 for line in draft.items)
        assert draft.total_items == sum(line.quantity for line in draft.items)
        assert draft.subtotal == sum((line.unit_price * line.quantity for line in draft.items), Decimal("0"))
