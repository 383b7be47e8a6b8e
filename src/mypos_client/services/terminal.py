"""The selling screen's behaviour without the screen.

:class:`PosTerminal` owns one :class:`SaleDraft` and wires it to the shift
guard, checkout, parked orders and product search. A UI calls these methods
and renders the returned values.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from ..checkout import CompletedSale, PaymentDetails
from ..coupon_validation import normalize_coupon_code, validate_coupon, validate_coupon_code
from ..exceptions import CouponRejectedError, NotFoundError, ValidationIssue
from ..models_catalog import Coupon, Product
from ..models_pos import Sale
from ..sale_draft import CartChange, SaleDraft
from ..sequencing import LatestRequestGuard, Scheduler, thread_timer_scheduler
from ..session import ApiSession
from ..telemetry import TelemetryLogger
from .checkout_service import CheckoutService
from .errors import CatalogServiceError, normalize_error
from .parked_orders_service import ParkedOrdersService, ReloadResult
from .product_search_service import ProductSearchService
from .shift_service import ShiftGuard

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AddProductResult:
    change: CartChange
    shift_warning: str | None = None


@dataclass(frozen=True)
class ScanResult:
    added: Product | None = None
    change: CartChange | None = None
    candidates: list[Product] = field(default_factory=list)


class PosTerminal:
    def __init__(
        self,
        session: ApiSession,
        *,
        draft: SaleDraft | None = None,
        telemetry: TelemetryLogger | None = None,
        on_search_results: Callable[[str, list[Product]], None] | None = None,
        search_scheduler: Scheduler = thread_timer_scheduler,
    ) -> None:
        self.session = session
        self.draft = draft or SaleDraft()
        self.telemetry = telemetry or TelemetryLogger()
        self.shift_guard = ShiftGuard(session, telemetry=self.telemetry)
        self.checkout_service = CheckoutService(session, shift_guard=self.shift_guard, telemetry=self.telemetry)
        self.parked_orders = ParkedOrdersService(session, telemetry=self.telemetry)
        self.products = ProductSearchService(session)
        self.search_results: list[Product] = []
        self.category_products: list[Product] = []
        self.selected_category_id: int | None = None
        self._category_guard = LatestRequestGuard()
        self._on_search_results = on_search_results
        self._search = self.products.debounced(self._apply_search_results, scheduler=search_scheduler)

    # Cart

    def add_product(self, product: Product, quantity: int = 1) -> AddProductResult:
        shift_warning = self.shift_guard.warn_if_no_shift(self.draft)
        change = self.draft.add_item(product, quantity)
        if change.warning:
            logger.info("stock_warning", extra={"product_id": product.id})
        return AddProductResult(change=change, shift_warning=shift_warning)

    def scan_barcode(self, code: str) -> ScanResult:
        matches = self.products.lookup_code(code)
        if len(matches) == 1:
            product = matches[0]
            return ScanResult(added=product, change=self.add_product(product).change)
        return ScanResult(candidates=matches)

    def apply_coupon(self, code: str) -> Coupon:
        check = validate_coupon_code(code)
        if not check.ok:
            raise CouponRejectedError(check.issues)
        normalized = normalize_coupon_code(code)
        try:
            coupon = self.session.pos_client().validate_coupon(normalized)
        except NotFoundError as exc:
            raise CouponRejectedError([ValidationIssue(field="code", reason="coupon not found")]) from exc
        except Exception as exc:
            raise normalize_error(exc, CatalogServiceError, "Could not validate the coupon") from exc
        result = validate_coupon(coupon)
        if not result.ok:
            logger.info("coupon_rejected", extra={"reasons": [issue.reason for issue in result.issues]})
            raise CouponRejectedError(result.issues)
        self.draft.set_discount(coupon.discount, coupon.id, coupon.code or normalized)
        logger.info("coupon_applied", extra={"coupon_id": coupon.id, "discount": str(coupon.discount)})
        return coupon

    def remove_coupon(self) -> None:
        self.draft.clear_discount()

    # Search and refresh

    def search(self, query: str) -> None:
        """Debounced search; results land in ``search_results``."""
        self._search.submit(query)

    def cancel_search(self) -> None:
        self._search.cancel()
        self.search_results = []

    def _apply_search_results(self, query: str, results: list[Product]) -> None:
        self.search_results = results
        if self._on_search_results:
            self._on_search_results(query, results)

    def select_category(self, category_id: int | None) -> list[Product]:
        self.selected_category_id = category_id
        ticket = self._category_guard.issue()
        if category_id is None:
            self.category_products = []
            return self.category_products
        products = self.products.category_products(category_id)
        self._category_guard.apply_if_latest(ticket, lambda: setattr(self, "category_products", products))
        return products

    def refresh_on_focus(self) -> None:
        """Best-effort refresh of the shift and the selected category."""
        try:
            self.shift_guard.active_shift()
        except Exception as exc:
            logger.warning("focus_refresh_shift_failed", extra={"error": str(exc)})
        if self.selected_category_id is None:
            return
        category_id = self.selected_category_id
        ticket = self._category_guard.issue()
        try:
            products = self.products.category_products(category_id)
        except Exception as exc:
            logger.warning("focus_refresh_products_failed", extra={"category_id": category_id, "error": str(exc)})
            return
        self._category_guard.apply_if_latest(ticket, lambda: setattr(self, "category_products", products))

    # Sale lifecycle

    def checkout(self, payment: PaymentDetails, idempotency_key: str | None = None) -> CompletedSale:
        completed = self.checkout_service.checkout(self.draft, payment, idempotency_key=idempotency_key)
        self.refresh_on_focus()
        return completed

    def pause_order(self, idempotency_key: str | None = None) -> Sale:
        return self.parked_orders.pause(self.draft, idempotency_key=idempotency_key)

    def reload_order(self, order_id: int) -> ReloadResult:
        return self.parked_orders.reload(order_id, self.draft)

    def clear_sale(self) -> None:
        self.draft.clear_cart()
        self.draft.reset_sale_data()
