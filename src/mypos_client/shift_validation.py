from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Literal

from .exceptions import ValidationIssue
from .models_pos import Shift

DifferenceKind = Literal["overage", "shortage", "exact"]


@dataclass(frozen=True)
class ShiftValidationResult:
    ok: bool
    issues: list[ValidationIssue]


@dataclass(frozen=True)
class ShiftClosePreview:
    expected: Decimal
    counted: Decimal
    difference: Decimal
    kind: DifferenceKind


def _require_non_negative_amount(value: Decimal | None, field: str, issues: list[ValidationIssue]) -> None:
    if value is None:
        issues.append(ValidationIssue(field=field, reason="is required"))
        return
    if Decimal(str(value)) < 0:
        issues.append(ValidationIssue(field=field, reason="must be 0 or greater"))


def validate_open_shift_payload(*, cash_register_id: int | None, base_amount: Decimal | None) -> ShiftValidationResult:
    issues: list[ValidationIssue] = []
    if cash_register_id is None:
        issues.append(ValidationIssue(field="cash_register_id", reason="is required"))
    _require_non_negative_amount(base_amount, "base_amount", issues)
    return ShiftValidationResult(ok=not issues, issues=issues)


def validate_close_shift_payload(*, final_cash_real: Decimal | None) -> ShiftValidationResult:
    issues: list[ValidationIssue] = []
    _require_non_negative_amount(final_cash_real, "final_cash_real", issues)
    return ShiftValidationResult(ok=not issues, issues=issues)


def preview_shift_close(shift: Shift, counted_cash: Decimal) -> ShiftClosePreview:
    expected = shift.final_cash_expected if shift.final_cash_expected is not None else shift.base_amount
    counted = Decimal(str(counted_cash))
    difference = counted - expected
    if difference > 0:
        kind: DifferenceKind = "overage"
    elif difference < 0:
        kind = "shortage"
    else:
        kind = "exact"
    return ShiftClosePreview(expected=expected, counted=counted, difference=difference, kind=kind)
