from __future__ import annotations

import logging
import time
from decimal import Decimal

from ..exceptions import ShiftRequiredError
from ..models_catalog import CashRegister
from ..models_pos import CloseShiftRequest, OpenShiftRequest, Shift, ShiftHistory
from ..sale_draft import SaleDraft
from ..session import ApiSession
from ..shift_validation import (
    ShiftClosePreview,
    preview_shift_close,
    validate_close_shift_payload,
    validate_open_shift_payload,
)
from ..telemetry import TelemetryLogger, build_event
from .errors import ShiftServiceError, issues_text, normalize_error

logger = logging.getLogger(__name__)

NO_SHIFT_WARNING = "No open shift: items can be added but the sale cannot be completed until a shift is opened"


class ShiftGuard:
    """Gates sale completion on an open cash-register shift.

    ``current`` is the last snapshot read from the backend. It is shown to the
    user but never trusted for checkout; :meth:`require_open_shift` always
    asks the backend again.
    """

    def __init__(self, session: ApiSession, telemetry: TelemetryLogger | None = None) -> None:
        self.session = session
        self.telemetry = telemetry or TelemetryLogger()
        self.current: Shift | None = None

    def active_shift(self) -> Shift | None:
        try:
            shift = self.session.shifts_client().get_active_shift()
        except Exception as exc:
            raise normalize_error(exc, ShiftServiceError, "Could not check the active shift") from exc
        self.current = shift if shift is not None and shift.is_open else None
        return self.current

    def require_open_shift(self) -> Shift:
        shift = self.active_shift()
        if shift is None:
            logger.info("shift_required")
            raise ShiftRequiredError()
        return shift

    def ensure_checkout_allowed(self) -> Shift:
        return self.require_open_shift()

    def warn_if_no_shift(self, draft: SaleDraft) -> str | None:
        if not draft.is_empty():
            return None
        try:
            shift = self.active_shift()
        except ShiftServiceError as exc:
            logger.warning("shift_check_failed", extra={"error": exc.message})
            return None
        return NO_SHIFT_WARNING if shift is None else None

    def open_shift(self, cash_register_id: int | None, base_amount: Decimal | None) -> Shift:
        check = validate_open_shift_payload(cash_register_id=cash_register_id, base_amount=base_amount)
        if not check.ok:
            raise ShiftServiceError(message=issues_text(check.issues))
        request = OpenShiftRequest(cash_register_id=cash_register_id, base_amount=Decimal(str(base_amount)))
        started = time.monotonic()
        try:
            shift = self.session.shifts_client().open_shift(request)
        except Exception as exc:
            self._emit("open_shift", started, success=False, error_code=getattr(exc, "code", None))
            raise normalize_error(exc, ShiftServiceError, "Could not open the shift") from exc
        self.current = shift
        logger.info("shift_opened", extra={"shift_id": shift.id, "cash_register_id": shift.cash_register_id})
        self._emit("open_shift", started, success=True, context={"shift_id": shift.id})
        return shift

    def preview_close(self, counted_cash: Decimal | None) -> ShiftClosePreview:
        check = validate_close_shift_payload(final_cash_real=counted_cash)
        if not check.ok:
            raise ShiftServiceError(message=issues_text(check.issues))
        shift = self.require_open_shift()
        return preview_shift_close(shift, Decimal(str(counted_cash)))

    def close_shift(self, counted_cash: Decimal | None, notes: str | None = None) -> Shift:
        check = validate_close_shift_payload(final_cash_real=counted_cash)
        if not check.ok:
            raise ShiftServiceError(message=issues_text(check.issues))
        shift = self.require_open_shift()
        request = CloseShiftRequest(final_cash_real=Decimal(str(counted_cash)), notes=notes or None)
        started = time.monotonic()
        try:
            closed = self.session.shifts_client().close_shift(shift.id, request)
        except Exception as exc:
            self._emit("close_shift", started, success=False, error_code=getattr(exc, "code", None))
            raise normalize_error(exc, ShiftServiceError, "Could not close the shift") from exc
        self.current = None
        logger.info("shift_closed", extra={"shift_id": shift.id, "difference": str(closed.difference)})
        self._emit("close_shift", started, success=True, context={"shift_id": shift.id})
        return closed

    def cash_registers(self) -> list[CashRegister]:
        try:
            return self.session.shifts_client().get_cash_registers()
        except Exception as exc:
            raise normalize_error(exc, ShiftServiceError, "Could not load cash registers") from exc

    def history(self, limit: int = 20) -> ShiftHistory:
        try:
            return self.session.shifts_client().get_history(limit=limit)
        except Exception as exc:
            raise normalize_error(exc, ShiftServiceError, "Could not load shift history") from exc

    def _emit(self, action: str, started: float, *, success: bool, error_code: str | None = None, context=None) -> None:
        self.telemetry.emit(
            build_event(
                category="shift",
                name=f"shift_{action}",
                module="shifts",
                action=action,
                duration_ms=int((time.monotonic() - started) * 1000),
                success=success,
                error_code=error_code,
                context=context,
            )
        )
