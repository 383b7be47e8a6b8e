from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Category(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    description: str | None = None
    image_url: str | None = Field(default=None, validation_alias=AliasChoices("image_url", "image"))
    is_active: bool | None = None
    products_count: int | None = None


class Product(BaseModel):
    """Catalog product as seen by the terminal.

    POS endpoints answer with ``product_id``/``title`` while the catalog uses
    ``id``/``name``; both spellings validate into the same model.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: int = Field(validation_alias=AliasChoices("product_id", "id"))
    name: str = Field(validation_alias=AliasChoices("title", "name"))
    sku: str | None = ""
    barcode: str | None = None
    category_id: int | None = None
    price: Decimal = Decimal("0")
    cost: Decimal | None = None
    stock: Decimal | None = None
    tax_id: int | None = None
    is_active: bool = True
    is_inventory_managed: bool = True
    image_url: str | None = Field(default=None, validation_alias=AliasChoices("image_url", "image"))


class Customer(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    nit: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    is_active: bool = True


class Tax(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    rate: Decimal | None = None
    is_active: bool | None = None


class Warehouse(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    code: str | None = None
    address: str | None = None
    is_active: bool | None = None


class WarehouseStock(BaseModel):
    model_config = ConfigDict(extra="allow")

    product_id: int
    product_name: str | None = None
    stock: Decimal = Decimal("0")
    min_stock: Decimal | None = None


class Coupon(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int | None = None
    code: str = ""
    discount: Decimal = Decimal("0")
    description: str | None = None
    is_active: bool = False
    valid_from: datetime | None = None
    valid_until: datetime | None = None
    usage_limit: int | None = None
    current_usage: int | None = None


class Role(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    description: str | None = None
    permissions: list[Any] = Field(default_factory=list)


class UserAccount(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    username: str
    email: str | None = None
    role_id: int | None = None
    role_name: str | None = None
    is_active: bool | None = None


class CashRegister(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    code: str | None = None
    description: str | None = None
    is_active: bool = True
    created_at: datetime | None = None


class InventoryItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    product_id: int
    product: Product | None = None
    stock: Decimal = Decimal("0")
    last_updated: datetime | None = None


class InventoryAdjustmentRequest(BaseModel):
    product_id: int
    warehouse_id: int
    quantity: int
    type: Literal["in", "out", "adjust"]
    reason: str


class InventoryMovement(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    product_id: int
    type: str
    quantity: Decimal
    reason: str | None = None
    created_at: datetime | None = None


class Purchase(BaseModel):
    """Stock purchase from a supplier; line shape is left to the backend."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: int
    supplier_name: str | None = Field(default=None, validation_alias=AliasChoices("supplier_name", "supplier"))
    warehouse_id: int | None = None
    invoice_number: str | None = None
    total: Decimal | None = Field(default=None, validation_alias=AliasChoices("total", "total_amount"))
    status: str | None = None
    created_at: datetime | None = None
    items: list[dict[str, Any]] = Field(default_factory=list)
