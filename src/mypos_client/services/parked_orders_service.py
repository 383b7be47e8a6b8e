from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from decimal import Decimal

from ..checkout import compute_pause_totals
from ..exceptions import ApiError, AuthError, EmptyCartError, PermissionError, ValidationIssue
from ..models_catalog import Product
from ..models_pos import PausedProduct, PauseOrderRequest, Sale, SaleLine
from ..sale_draft import SaleDraft
from ..session import ApiSession
from ..telemetry import TelemetryLogger, build_event
from .errors import ParkedOrderError, normalize_error

logger = logging.getLogger(__name__)

PLACEHOLDER_STOCK = Decimal("999")


@dataclass(frozen=True)
class ReloadResult:
    order: Sale
    items_loaded: int
    placeholder_product_ids: list[int] = field(default_factory=list)
    parked_order_deleted: bool = True


def placeholder_product(line: SaleLine) -> Product:
    return Product(
        id=line.product_id,
        name=f"Producto #{line.product_id}",
        price=line.price,
        stock=PLACEHOLDER_STOCK,
        is_inventory_managed=line.is_inventory_managed,
    )


def order_number(now_ms: int | None = None) -> str:
    return f"TEMP-{now_ms if now_ms is not None else int(time.time() * 1000)}"


class ParkedOrdersService:
    def __init__(self, session: ApiSession, telemetry: TelemetryLogger | None = None) -> None:
        self.session = session
        self.telemetry = telemetry or TelemetryLogger()

    def pause(self, draft: SaleDraft, idempotency_key: str | None = None) -> Sale:
        if draft.is_empty():
            raise EmptyCartError([ValidationIssue(field="items", reason="cart is empty")])
        totals = compute_pause_totals(draft.subtotal, draft.discount_percentage)
        request = PauseOrderRequest(
            customer_id=draft.customer_id,
            customer_name=draft.customer_name,
            order_number=order_number(),
            sale_type=draft.order_type or "",
            sale_name=draft.sale_name,
            coupon_id=draft.coupon_id,
            discount_percentage=draft.discount_percentage,
            subtotal=totals.subtotal,
            discount=totals.discount_amount,
            tax_total=totals.tax,
            total=totals.total,
            products=[
                PausedProduct(id=line.product_id, price=line.unit_price, quantity=line.quantity, discount=line.discount)
                for line in draft.items
            ],
        )
        try:
            order = self.session.pos_client().pause_order(request, idempotency_key=idempotency_key)
        except Exception as exc:
            raise normalize_error(exc, ParkedOrderError, "The order could not be paused") from exc
        logger.info("order_paused", extra={"order_id": order.id, "order_number": request.order_number})
        draft.clear_cart()
        draft.reset_sale_data()
        self._emit("pause", success=True, context={"order_id": order.id})
        return order

    def recent_orders(self, limit: int = 20) -> list[Sale]:
        try:
            return self.session.pos_client().get_recent_orders(limit=limit)
        except Exception as exc:
            raise normalize_error(exc, ParkedOrderError, "Could not load parked orders") from exc

    def reload(self, order_id: int, draft: SaleDraft) -> ReloadResult:
        """Replace ``draft`` with a parked order, then delete the order.

        An order with no items leaves ``draft`` untouched. A line whose product
        can no longer be fetched is restored from a placeholder product.
        """
        client = self.session.pos_client()
        try:
            order = client.get_order(order_id)
        except Exception as exc:
            raise normalize_error(exc, ParkedOrderError, "Could not load the parked order") from exc
        if not order.items:
            raise ParkedOrderError(message="This order has no products")

        draft.clear_cart()
        draft.reset_sale_data()
        if order.customer_name and order.customer_id:
            draft.set_customer(order.customer_name, order.customer_id)
        if order.sale_type:
            draft.set_order_type(order.sale_type)
        if order.discount_percentage and order.discount_percentage > 0:
            draft.set_discount(order.discount_percentage, order.coupon_id, None)

        placeholders: list[int] = []
        for line in order.items:
            try:
                product = client.get_product(line.product_id)
            except (AuthError, PermissionError):
                raise
            except ApiError as exc:
                logger.warning(
                    "parked_product_unavailable",
                    extra={"order_id": order_id, "product_id": line.product_id, "error_code": exc.code},
                )
                product = placeholder_product(line)
                placeholders.append(line.product_id)
            draft.add_item(product, line.quantity)

        deleted = True
        try:
            client.delete_order(order_id)
        except ApiError as exc:
            deleted = False
            logger.error("parked_order_delete_failed", extra={"order_id": order_id, "error_code": exc.code})
        logger.info(
            "order_reloaded",
            extra={"order_id": order_id, "items": len(order.items), "placeholders": len(placeholders)},
        )
        self._emit("reload", success=True, context={"order_id": order_id, "placeholders": len(placeholders)})
        return ReloadResult(
            order=order,
            items_loaded=len(order.items),
            placeholder_product_ids=placeholders,
            parked_order_deleted=deleted,
        )

    def delete(self, order_id: int) -> None:
        try:
            self.session.pos_client().delete_order(order_id)
        except Exception as exc:
            raise normalize_error(exc, ParkedOrderError, "Could not delete the parked order") from exc
        logger.info("parked_order_deleted", extra={"order_id": order_id})

    def _emit(self, action: str, *, success: bool, context=None) -> None:
        self.telemetry.emit(
            build_event(
                category="parked_order",
                name=f"parked_order_{action}",
                module="pos",
                action=action,
                success=success,
                context=context,
            )
        )
