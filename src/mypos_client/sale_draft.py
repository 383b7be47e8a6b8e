"""In-memory state of the sale being built at the terminal.

A :class:`SaleDraft` holds at most one :class:`LineItem` per product id plus
the sale metadata (customer, order type, sale name, discount and the coupon
backing it). It never talks to the network; stock problems are reported as
:class:`CartChange` warnings, not exceptions.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from .models_catalog import Product

DEFAULT_CUSTOMER_NAME = "Consumidor Final"
DEFAULT_CUSTOMER_ID = 1


@dataclass
class LineItem:
    product: Product
    quantity: int
    unit_price: Decimal
    discount: Decimal = Decimal("0")

    @property
    def product_id(self) -> int:
        return self.product.id

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity - self.discount


@dataclass(frozen=True)
class CartChange:
    applied: bool
    warning: str | None = None


def _stock_warning(product: Product, quantity: int) -> str | None:
    if not product.is_inventory_managed or product.stock is None:
        return None
    if quantity > product.stock:
        return f"Only {product.stock.normalize():f} units of {product.name} in stock"
    return None


@dataclass
class SaleDraft:
    customer_name: str = DEFAULT_CUSTOMER_NAME
    customer_id: int = DEFAULT_CUSTOMER_ID
    order_type: str | None = None
    sale_name: str | None = None
    discount_percentage: Decimal = Decimal("0")
    coupon_id: int | None = None
    coupon_code: str | None = None
    _lines: dict[int, LineItem] = field(default_factory=dict, repr=False)

    @property
    def items(self) -> list[LineItem]:
        return list(self._lines.values())

    @property
    def total_items(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    @property
    def subtotal(self) -> Decimal:
        return sum((line.subtotal for line in self._lines.values()), Decimal("0"))

    def is_empty(self) -> bool:
        return not self._lines

    def line(self, product_id: int) -> LineItem | None:
        return self._lines.get(product_id)

    def add_item(self, product: Product, quantity: int = 1) -> CartChange:
        if quantity < 1:
            raise ValueError("quantity must be at least 1")
        existing = self._lines.get(product.id)
        if existing is None:
            self._lines[product.id] = LineItem(product=product, quantity=quantity, unit_price=product.price)
            new_quantity = quantity
        else:
            existing.quantity += quantity
            new_quantity = existing.quantity
        return CartChange(applied=True, warning=_stock_warning(product, new_quantity))

    def update_quantity(self, product_id: int, quantity: int) -> CartChange:
        line = self._lines.get(product_id)
        if line is None:
            return CartChange(applied=False)
        if quantity <= 0:
            self.remove_item(product_id)
            return CartChange(applied=True)
        warning = _stock_warning(line.product, quantity)
        if warning:
            return CartChange(applied=False, warning=warning)
        line.quantity = quantity
        return CartChange(applied=True)

    def remove_item(self, product_id: int) -> None:
        self._lines.pop(product_id, None)

    def clear_cart(self) -> None:
        self._lines.clear()

    def set_discount(self, percentage: Decimal, coupon_id: int | None = None, coupon_code: str | None = None) -> None:
        percentage = Decimal(str(percentage))
        if percentage < 0 or percentage > 100:
            raise ValueError("discount percentage must be between 0 and 100")
        self.discount_percentage = percentage
        self.coupon_id = coupon_id
        self.coupon_code = coupon_code

    def clear_discount(self) -> None:
        self.discount_percentage = Decimal("0")
        self.coupon_id = None
        self.coupon_code = None

    def set_customer(self, name: str, customer_id: int) -> None:
        self.customer_name = name
        self.customer_id = customer_id

    def set_order_type(self, label: str | None) -> None:
        self.order_type = label

    def set_sale_name(self, label: str | None) -> None:
        self.sale_name = label

    def reset_sale_data(self) -> None:
        self.customer_name = DEFAULT_CUSTOMER_NAME
        self.customer_id = DEFAULT_CUSTOMER_ID
        self.order_type = None
        self.sale_name = None
        self.clear_discount()
