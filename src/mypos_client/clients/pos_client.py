from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import quote

from ..idempotency import idempotency_headers, resolve_idempotency_key
from ..models_catalog import Category, Coupon, Customer, Product
from ..models_pos import CreateSaleRequest, PauseOrderRequest, Sale
from .base import BaseClient, coerce_model, compact

CATEGORIES_PATH = "/api/pos/categories"
PRODUCTS_SEARCH_PATH = "/api/pos/products/search"
CUSTOMERS_SEARCH_PATH = "/api/pos/customers/search"
SALES_PATH = "/api/pos/sales"
ORDERS_RECENT_PATH = "/api/pos/orders/recent"
ORDER_PAUSE_PATH = "/api/pos/orders/pause"
SALES_HISTORY_PATH = "/api/sales"


@dataclass
class PosClient(BaseClient):
    module_name = "pos"

    def get_categories(self) -> list[Category]:
        return self._fetch("GET", CATEGORIES_PATH, list[Category], operation="categories")

    def get_category_products(self, category_id: int) -> list[Product]:
        return self._fetch(
            "GET",
            f"{CATEGORIES_PATH}/{category_id}/products",
            list[Product],
            operation="category_products",
        )

    def search_products(self, query: str) -> list[Product]:
        return self._fetch(
            "GET",
            PRODUCTS_SEARCH_PATH,
            list[Product],
            operation="search_products",
            params={"q": query},
        )

    def get_product(self, product_id: int) -> Product:
        return self._fetch("GET", f"/api/products/{product_id}", Product, operation="product_detail")

    def search_customers(self, query: str) -> list[Customer]:
        return self._fetch(
            "GET",
            CUSTOMERS_SEARCH_PATH,
            list[Customer],
            operation="search_customers",
            params={"q": query},
        )

    def validate_coupon(self, code: str) -> Coupon:
        return self._fetch("GET", f"/api/coupons/{quote(code, safe='')}", Coupon, operation="validate_coupon")

    def create_sale(
        self,
        payload: CreateSaleRequest | Mapping[str, Any],
        idempotency_key: str | None = None,
    ) -> Sale:
        request = coerce_model(payload, CreateSaleRequest)
        key = resolve_idempotency_key(idempotency_key)
        return self._fetch(
            "POST",
            SALES_PATH,
            Sale,
            operation="create_sale",
            json_body=request.model_dump(mode="json"),
            headers=idempotency_headers(key),
        )

    def get_recent_orders(self, limit: int = 20) -> list[Sale]:
        return self._fetch(
            "GET",
            ORDERS_RECENT_PATH,
            list[Sale],
            operation="recent_orders",
            params=compact({"limit": limit}),
        )

    def get_order(self, order_id: int) -> Sale:
        return self._fetch("GET", f"/api/pos/orders/{order_id}", Sale, operation="order_detail")

    def pause_order(
        self,
        payload: PauseOrderRequest | Mapping[str, Any],
        idempotency_key: str | None = None,
    ) -> Sale:
        request = coerce_model(payload, PauseOrderRequest)
        key = resolve_idempotency_key(idempotency_key)
        return self._fetch(
            "POST",
            ORDER_PAUSE_PATH,
            Sale,
            operation="pause_order",
            json_body=request.model_dump(mode="json"),
            headers=idempotency_headers(key),
        )

    def delete_order(self, order_id: int) -> None:
        self._request("DELETE", f"/api/pos/orders/{order_id}", operation="delete_order")

    def get_sales(self) -> list[Sale]:
        """Completed sales, newest first as the backend orders them."""
        return self._fetch("GET", SALES_HISTORY_PATH, list[Sale], operation="sales_history")

    def get_sale(self, sale_id: int) -> Sale:
        return self._fetch("GET", f"{SALES_HISTORY_PATH}/{sale_id}", Sale, operation="sale_detail")
