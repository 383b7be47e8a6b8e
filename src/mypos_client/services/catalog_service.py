from __future__ import annotations

import logging
from typing import Any, BinaryIO, Mapping

from ..models_catalog import InventoryAdjustmentRequest, InventoryItem, InventoryMovement, WarehouseStock
from ..session import ApiSession
from .errors import CatalogServiceError, normalize_error

logger = logging.getLogger(__name__)


class CatalogService:
    """List/detail/edit operations behind the back-office screens."""

    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def list(self, resource: str, **filters: Any) -> list[Any]:
        try:
            return self.session.catalog_client(resource).list(**filters)
        except Exception as exc:
            raise normalize_error(exc, CatalogServiceError, f"Could not load {resource}") from exc

    def get(self, resource: str, item_id: int) -> Any:
        try:
            return self.session.catalog_client(resource).get(item_id)
        except Exception as exc:
            raise normalize_error(exc, CatalogServiceError, f"Could not load {resource}") from exc

    def save(
        self,
        resource: str,
        payload: Mapping[str, Any],
        *,
        item_id: int | None = None,
        image: BinaryIO | None = None,
    ) -> Any:
        client = self.session.catalog_client(resource)
        try:
            if item_id is None:
                saved = client.create(payload, image=image)
            else:
                saved = client.update(item_id, payload, image=image)
        except Exception as exc:
            raise normalize_error(exc, CatalogServiceError, f"Could not save {resource}") from exc
        logger.info("catalog_saved", extra={"resource": resource, "item_id": getattr(saved, "id", item_id)})
        return saved

    def delete(self, resource: str, item_id: int) -> None:
        try:
            self.session.catalog_client(resource).delete(item_id)
        except Exception as exc:
            raise normalize_error(exc, CatalogServiceError, f"Could not delete {resource}") from exc
        logger.info("catalog_deleted", extra={"resource": resource, "item_id": item_id})

    def upload_image(self, resource: str, item_id: int, image: BinaryIO, filename: str = "image.jpg") -> Any:
        try:
            return self.session.catalog_client(resource).upload_image(item_id, image, filename=filename)
        except Exception as exc:
            raise normalize_error(exc, CatalogServiceError, "Could not upload the image") from exc

    def warehouse_stock(self, warehouse_id: int) -> list[InventoryItem]:
        try:
            return self.session.inventory_client().get_warehouse_stock(warehouse_id)
        except Exception as exc:
            raise normalize_error(exc, CatalogServiceError, "Could not load stock") from exc

    def low_stock(self, warehouse_id: int | None = None) -> list[WarehouseStock]:
        try:
            return self.session.inventory_client().get_low_stock(warehouse_id)
        except Exception as exc:
            raise normalize_error(exc, CatalogServiceError, "Could not load low stock") from exc

    def movements(self, product_id: int | None = None) -> list[InventoryMovement]:
        try:
            return self.session.inventory_client().get_movements(product_id)
        except Exception as exc:
            raise normalize_error(exc, CatalogServiceError, "Could not load movements") from exc

    def adjust_inventory(self, payload: InventoryAdjustmentRequest | Mapping[str, Any]) -> Any:
        try:
            result = self.session.inventory_client().adjust(payload)
        except Exception as exc:
            raise normalize_error(exc, CatalogServiceError, "Could not adjust inventory") from exc
        logger.info("inventory_adjusted")
        return result
