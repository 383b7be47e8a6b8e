"""Conventional REST CRUD over the catalog resources.

One :class:`CatalogClient` instance is bound to one resource path and one
pydantic model. Categories and products take multipart bodies (they carry an
optional image); every other resource takes JSON.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, BinaryIO, Generic, Mapping, TypeVar

from pydantic import BaseModel

from ..models_catalog import (
    Category,
    CashRegister,
    Coupon,
    Customer,
    Product,
    Purchase,
    Role,
    Tax,
    UserAccount,
    Warehouse,
)
from .base import BaseClient

ModelT = TypeVar("ModelT", bound=BaseModel)


def form_value(value: Any) -> str:
    """Render one multipart field the way the backend parses form fields."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


@dataclass(frozen=True)
class CatalogResource(Generic[ModelT]):
    name: str
    path: str
    model: type[ModelT]
    multipart: bool = False
    image_path: str | None = None


CATEGORIES = CatalogResource(
    "categories", "/api/categories", Category, multipart=True, image_path="/api/categories/image/{id}"
)
PRODUCTS = CatalogResource(
    "products", "/api/products", Product, multipart=True, image_path="/api/products/{id}/image"
)
CUSTOMERS = CatalogResource("customers", "/api/customers", Customer)
TAXES = CatalogResource("taxes", "/api/taxes", Tax)
WAREHOUSES = CatalogResource("warehouses", "/api/warehouses", Warehouse)
COUPONS = CatalogResource("coupons", "/api/coupons", Coupon)
USERS = CatalogResource("users", "/api/users", UserAccount)
ROLES = CatalogResource("roles", "/api/roles", Role)
CASH_REGISTERS = CatalogResource("cash_registers", "/api/pos/cash-registers", CashRegister)
PURCHASES = CatalogResource("purchases", "/api/purchases", Purchase)

RESOURCES: dict[str, CatalogResource[Any]] = {
    resource.name: resource
    for resource in (
        CATEGORIES,
        PRODUCTS,
        CUSTOMERS,
        TAXES,
        WAREHOUSES,
        COUPONS,
        USERS,
        ROLES,
        CASH_REGISTERS,
        PURCHASES,
    )
}


@dataclass
class CatalogClient(BaseClient, Generic[ModelT]):
    resource: CatalogResource[ModelT] | None = None

    module_name = "catalog"

    def _resource(self) -> CatalogResource[ModelT]:
        if self.resource is None:
            raise RuntimeError("CatalogClient requires a resource")
        return self.resource

    def list(self, **filters: Any) -> list[ModelT]:
        resource = self._resource()
        params = {key: value for key, value in filters.items() if value is not None} or None
        return self._fetch("GET", resource.path, list[resource.model], operation=f"{resource.name}_list", params=params)

    def get(self, item_id: int) -> ModelT:
        resource = self._resource()
        return self._fetch("GET", f"{resource.path}/{item_id}", resource.model, operation=f"{resource.name}_detail")

    def create(self, payload: Mapping[str, Any], *, image: BinaryIO | None = None) -> ModelT:
        resource = self._resource()
        return self._fetch(
            "POST",
            resource.path,
            resource.model,
            operation=f"{resource.name}_create",
            **self._body(payload, image),
        )

    def update(self, item_id: int, payload: Mapping[str, Any], *, image: BinaryIO | None = None) -> ModelT:
        resource = self._resource()
        return self._fetch(
            "PUT",
            f"{resource.path}/{item_id}",
            resource.model,
            operation=f"{resource.name}_update",
            **self._body(payload, image),
        )

    def delete(self, item_id: int) -> None:
        resource = self._resource()
        self._request("DELETE", f"{resource.path}/{item_id}", operation=f"{resource.name}_delete")

    def _body(self, payload: Mapping[str, Any], image: BinaryIO | None) -> dict[str, Any]:
        fields = {key: value for key, value in payload.items() if value is not None}
        if not self._resource().multipart:
            if image is not None:
                raise ValueError(f"{self._resource().name} does not accept an image upload")
            return {"json_body": fields}
        # filename-less parts keep the body multipart when there is no image
        parts: dict[str, Any] = {key: (None, form_value(value)) for key, value in fields.items()}
        if image is not None:
            parts["image"] = image
        return {"files": parts}

    def upload_image(self, item_id: int, image: BinaryIO, *, filename: str = "image.jpg") -> ModelT:
        resource = self._resource()
        if resource.image_path is None:
            raise ValueError(f"{resource.name} does not accept an image upload")
        return self._fetch(
            "POST",
            resource.image_path.format(id=item_id),
            resource.model,
            operation=f"{resource.name}_image",
            files={"image": (filename, image)},
        )
