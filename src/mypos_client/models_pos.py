from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PlainSerializer

# Amounts travel as JSON numbers; Decimal is kept on the Python side.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

PaymentMethod = Literal["cash", "transfer"]


class Shift(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: int
    user_id: int | None = None
    cash_register_id: int
    cash_register_name: str | None = None
    cash_register_code: str | None = None
    warehouse_id: int
    warehouse_name: str | None = None
    base_amount: Money = Decimal("0")
    final_cash_expected: Money | None = None
    final_cash_real: Money | None = None
    difference: Money | None = None
    start_time: datetime | None = Field(default=None, validation_alias=AliasChoices("start_time", "opened_at"))
    end_time: datetime | None = Field(default=None, validation_alias=AliasChoices("end_time", "closed_at"))
    status: Literal["open", "closed"] = "open"
    notes: str | None = None
    hours_worked: Decimal | None = None

    @property
    def is_open(self) -> bool:
        return self.status == "open"


class ShiftHistory(BaseModel):
    model_config = ConfigDict(extra="allow")

    history: list[Shift] = Field(default_factory=list)
    total: int = 0


class OpenShiftRequest(BaseModel):
    cash_register_id: int
    base_amount: Money


class CloseShiftRequest(BaseModel):
    final_cash_real: Money
    notes: str | None = None


class SaleItemRequest(BaseModel):
    product_id: int
    quantity: int
    price: Money
    tax_rate: Money
    discount: Money = Decimal("0")
    is_inventory_managed: bool = True


class CreateSaleRequest(BaseModel):
    customer_id: int
    customer_name: str
    cash_register_id: int
    shift_id: int
    warehouse_id: int
    payment_method: PaymentMethod
    order_type: str | None = None
    sale_name: str | None = None
    coupon_id: int | None = None
    discount_percentage: Money = Decimal("0")
    subtotal: Money
    discount: Money
    tax: Money
    total: Money
    amount_received: Money
    change: Money
    resolution_id: int | None = None
    invoice_number: str | None = None
    items: list[SaleItemRequest]


class SaleLine(BaseModel):
    model_config = ConfigDict(extra="allow")

    product_id: int
    quantity: int = 1
    price: Money = Field(default=Decimal("0"), validation_alias=AliasChoices("price", "unit_price"))
    tax_rate: Money | None = None
    discount: Money = Decimal("0")
    is_inventory_managed: bool = True


class Sale(BaseModel):
    """Sale or parked order as returned by the backend."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: int = Field(validation_alias=AliasChoices("id", "sale_id"))
    invoice_number: str | None = Field(default=None, validation_alias=AliasChoices("invoice_number", "folio"))
    customer_id: int | None = None
    customer_name: str | None = None
    sale_type: str | None = None
    coupon_id: int | None = None
    discount_percentage: Money | None = None
    subtotal: Money | None = None
    tax: Money | None = Field(default=None, validation_alias=AliasChoices("tax", "tax_amount", "tax_total"))
    discount: Money | None = None
    total: Money | None = Field(default=None, validation_alias=AliasChoices("total", "total_amount"))
    change: Money | None = None
    payment_method: str | None = None
    status: str | None = None
    created_at: datetime | None = None
    items: list[SaleLine] = Field(default_factory=list)

    @property
    def label(self) -> str:
        return self.invoice_number or f"#{self.id}"


class PausedProduct(BaseModel):
    id: int
    price: Money
    quantity: int
    discount: Money = Decimal("0")


class PauseOrderRequest(BaseModel):
    customer_id: int
    customer_name: str
    order_number: str
    sale_type: str = ""
    sale_name: str | None = None
    coupon_id: int | None = None
    discount_percentage: Money = Decimal("0")
    subtotal: Money
    discount: Money
    tax_total: Money
    total: Money
    products: list[PausedProduct]
