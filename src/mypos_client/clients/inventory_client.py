from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..models_catalog import InventoryAdjustmentRequest, InventoryItem, InventoryMovement, WarehouseStock
from .base import BaseClient, coerce_model, compact

INVENTORY_PATH = "/api/inventory"


@dataclass
class InventoryClient(BaseClient):
    module_name = "inventory"

    def get_warehouse_stock(self, warehouse_id: int) -> list[InventoryItem]:
        return self._fetch(
            "GET",
            f"{INVENTORY_PATH}/warehouse/{warehouse_id}/stock",
            list[InventoryItem],
            operation="warehouse_stock",
        )

    def get_low_stock(self, warehouse_id: int | None = None) -> list[WarehouseStock]:
        return self._fetch(
            "GET",
            f"{INVENTORY_PATH}/low-stock",
            list[WarehouseStock],
            operation="low_stock",
            params=compact({"warehouseId": warehouse_id}),
        )

    def get_movements(self, product_id: int | None = None) -> list[InventoryMovement]:
        return self._fetch(
            "GET",
            f"{INVENTORY_PATH}/movements",
            list[InventoryMovement],
            operation="movements",
            params=compact({"product_id": product_id}),
        )

    def adjust(self, payload: InventoryAdjustmentRequest | Mapping[str, Any]) -> Any:
        request = coerce_model(payload, InventoryAdjustmentRequest)
        return self._fetch(
            "POST",
            f"{INVENTORY_PATH}/adjust",
            Any,
            operation="adjust",
            json_body=request.model_dump(mode="json"),
        )
