from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..exceptions import NotFoundError
from ..models_catalog import CashRegister
from ..models_pos import CloseShiftRequest, OpenShiftRequest, Shift, ShiftHistory
from .base import BaseClient, coerce_model, compact

SHIFTS_PATH = "/api/pos/shifts"
SHIFT_HISTORY_PATH = "/api/shifts/history/me"
CASH_REGISTERS_PATH = "/api/pos/cash-registers"


@dataclass
class ShiftsClient(BaseClient):
    module_name = "shifts"

    def get_active_shift(self) -> Shift | None:
        """The caller's open shift, or ``None`` when the backend answers 404."""
        try:
            return self._fetch("GET", f"{SHIFTS_PATH}/active", Shift | None, operation="active_shift")
        except NotFoundError:
            return None

    def open_shift(self, payload: OpenShiftRequest | Mapping[str, Any]) -> Shift:
        request = coerce_model(payload, OpenShiftRequest)
        return self._fetch(
            "POST",
            f"{SHIFTS_PATH}/open",
            Shift,
            operation="open_shift",
            json_body=request.model_dump(mode="json"),
        )

    def close_shift(self, shift_id: int, payload: CloseShiftRequest | Mapping[str, Any]) -> Shift:
        request = coerce_model(payload, CloseShiftRequest)
        return self._fetch(
            "POST",
            f"{SHIFTS_PATH}/{shift_id}/close",
            Shift,
            operation="close_shift",
            json_body=request.model_dump(mode="json", exclude_none=True),
        )

    def get_shift(self, shift_id: int) -> Shift:
        return self._fetch("GET", f"{SHIFTS_PATH}/{shift_id}", Shift, operation="shift_detail")

    def get_history(self, limit: int = 20) -> ShiftHistory:
        return self._fetch(
            "GET",
            SHIFT_HISTORY_PATH,
            ShiftHistory,
            operation="shift_history",
            params=compact({"limit": limit}),
        )

    def get_cash_registers(self) -> list[CashRegister]:
        return self._fetch("GET", CASH_REGISTERS_PATH, list[CashRegister], operation="cash_registers")
