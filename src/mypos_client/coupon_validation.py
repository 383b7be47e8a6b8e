from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from .exceptions import ValidationIssue
from .models_catalog import Coupon


@dataclass(frozen=True)
class CouponValidationResult:
    ok: bool
    issues: list[ValidationIssue]


def normalize_coupon_code(code: str | None) -> str:
    return (code or "").strip().upper()


def validate_coupon_code(code: str | None) -> CouponValidationResult:
    issues: list[ValidationIssue] = []
    if not normalize_coupon_code(code):
        issues.append(ValidationIssue(field="code", reason="is required"))
    return CouponValidationResult(ok=not issues, issues=issues)


def _as_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def validate_coupon(coupon: Coupon | None, *, now: datetime | None = None) -> CouponValidationResult:
    """Check a fetched coupon before its discount is applied to a draft."""
    issues: list[ValidationIssue] = []
    if coupon is None or coupon.id is None:
        issues.append(ValidationIssue(field="code", reason="coupon not found"))
        return CouponValidationResult(ok=False, issues=issues)
    if not coupon.is_active:
        issues.append(ValidationIssue(field="is_active", reason="coupon is not active"))
    current = _as_aware(now or datetime.now(timezone.utc))
    if coupon.valid_until is not None and _as_aware(coupon.valid_until) < current:
        issues.append(ValidationIssue(field="valid_until", reason="coupon has expired"))
    if (
        coupon.usage_limit is not None
        and coupon.current_usage is not None
        and coupon.current_usage >= coupon.usage_limit
    ):
        issues.append(ValidationIssue(field="usage_limit", reason="coupon usage limit reached"))
    if coupon.discount < 0 or coupon.discount > 100:
        issues.append(ValidationIssue(field="discount", reason="must be between 0 and 100"))
    return CouponValidationResult(ok=not issues, issues=issues)
