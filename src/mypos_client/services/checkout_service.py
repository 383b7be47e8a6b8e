from __future__ import annotations

import logging
import time

from ..checkout import (
    CompletedSale,
    PaymentDetails,
    build_sale_request,
    compute_sale_totals,
    validate_payment,
)
from ..exceptions import EmptyCartError, ValidationIssue
from ..sale_draft import SaleDraft
from ..session import ApiSession
from ..telemetry import TelemetryLogger, build_event
from .errors import CheckoutError, normalize_error
from .shift_service import ShiftGuard

logger = logging.getLogger(__name__)


class CheckoutService:
    def __init__(
        self,
        session: ApiSession,
        shift_guard: ShiftGuard | None = None,
        telemetry: TelemetryLogger | None = None,
    ) -> None:
        self.session = session
        self.telemetry = telemetry or TelemetryLogger()
        self.shift_guard = shift_guard or ShiftGuard(session, telemetry=self.telemetry)

    def checkout(
        self,
        draft: SaleDraft,
        payment: PaymentDetails,
        idempotency_key: str | None = None,
    ) -> CompletedSale:
        """Submit ``draft`` as a sale.

        Local validation (empty cart, insufficient cash) happens before any
        request. The shift is fetched again right before submission. The
        draft is cleared only once the backend has accepted the sale.
        """
        if draft.is_empty():
            raise EmptyCartError([ValidationIssue(field="items", reason="cart is empty")])
        totals = compute_sale_totals(draft.subtotal, draft.discount_percentage)
        settled = validate_payment(totals.total, payment)
        shift = self.shift_guard.require_open_shift()

        request = build_sale_request(draft, shift, totals, settled)
        started = time.monotonic()
        try:
            sale = self.session.pos_client().create_sale(request, idempotency_key=idempotency_key)
        except Exception as exc:
            error = normalize_error(exc, CheckoutError, "The sale could not be completed")
            logger.warning(
                "checkout_failed",
                extra={"shift_id": shift.id, "items": draft.total_items, "error": error.message},
            )
            self._emit(started, success=False, error_code=getattr(exc, "code", None), context={"shift_id": shift.id})
            raise error from exc

        completed = CompletedSale(
            invoice_number=sale.invoice_number,
            sale_id=sale.id,
            totals=totals,
            payment=settled,
            sale=sale,
        )
        logger.info(
            "checkout_completed",
            extra={"sale_id": sale.id, "total": str(totals.total), "payment_method": settled.method},
        )
        draft.clear_cart()
        draft.reset_sale_data()
        self._emit(started, success=True, context={"shift_id": shift.id, "sale_id": sale.id})
        return completed

    def _emit(self, started: float, *, success: bool, error_code: str | None = None, context=None) -> None:
        self.telemetry.emit(
            build_event(
                category="sale",
                name="sale_checkout",
                module="pos",
                action="checkout",
                duration_ms=int((time.monotonic() - started) * 1000),
                success=success,
                error_code=error_code,
                context=context,
            )
        )
