from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from .exceptions import InsufficientPaymentError, ValidationIssue
from .models_pos import CreateSaleRequest, PaymentMethod, Sale, SaleItemRequest, Shift
from .sale_draft import SaleDraft

TAX_RATE = Decimal("0.19")
# Sent on every sale line; the backend stores it as a percentage.
LINE_TAX_RATE = Decimal("19")

CENT = Decimal("0.01")


def _money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class SaleTotals:
    subtotal: Decimal
    discount_amount: Decimal
    subtotal_after_discount: Decimal
    tax: Decimal
    total: Decimal


@dataclass(frozen=True)
class PaymentDetails:
    method: PaymentMethod
    amount_received: Decimal | None = None


@dataclass(frozen=True)
class SettledPayment:
    method: PaymentMethod
    amount_received: Decimal
    change: Decimal


@dataclass(frozen=True)
class CompletedSale:
    invoice_number: str | None
    sale_id: int
    totals: SaleTotals
    payment: SettledPayment
    sale: Sale


def compute_sale_totals(
    subtotal: Decimal,
    discount_percentage: Decimal = Decimal("0"),
    tax_rate: Decimal = TAX_RATE,
) -> SaleTotals:
    """Discount first, then tax on the discounted amount."""
    subtotal = Decimal(str(subtotal))
    discount_amount = _money(subtotal * Decimal(str(discount_percentage)) / Decimal("100"))
    after_discount = _money(subtotal - discount_amount)
    tax = _money(after_discount * Decimal(str(tax_rate)))
    return SaleTotals(
        subtotal=_money(subtotal),
        discount_amount=discount_amount,
        subtotal_after_discount=after_discount,
        tax=tax,
        total=_money(after_discount + tax),
    )


def compute_pause_totals(
    subtotal: Decimal,
    discount_percentage: Decimal = Decimal("0"),
    tax_rate: Decimal = TAX_RATE,
) -> SaleTotals:
    """Totals recorded on a parked order.

    Tax is charged on the full subtotal and the discount is taken off the
    taxed amount, so these differ from :func:`compute_sale_totals` whenever a
    discount applies. The backend recomputes sale totals on checkout.
    """
    subtotal = Decimal(str(subtotal))
    discount_amount = _money(subtotal * Decimal(str(discount_percentage)) / Decimal("100"))
    tax = _money(subtotal * Decimal(str(tax_rate)))
    return SaleTotals(
        subtotal=_money(subtotal),
        discount_amount=discount_amount,
        subtotal_after_discount=_money(subtotal - discount_amount),
        tax=tax,
        total=_money(subtotal + tax - discount_amount),
    )


def validate_payment(total: Decimal, payment: PaymentDetails) -> SettledPayment:
    if payment.method == "transfer":
        return SettledPayment(method="transfer", amount_received=total, change=Decimal("0.00"))
    if payment.method != "cash":
        raise InsufficientPaymentError(
            [ValidationIssue(field="method", reason=f"unsupported payment method {payment.method!r}")]
        )
    if payment.amount_received is None:
        raise InsufficientPaymentError([ValidationIssue(field="amount_received", reason="is required")])
    received = Decimal(str(payment.amount_received))
    if received < total:
        raise InsufficientPaymentError(
            [ValidationIssue(field="amount_received", reason=f"must be at least {total}")]
        )
    return SettledPayment(method="cash", amount_received=received, change=max(received - total, Decimal("0.00")))


def build_sale_request(
    draft: SaleDraft,
    shift: Shift,
    totals: SaleTotals,
    payment: SettledPayment,
) -> CreateSaleRequest:
    items = [
        SaleItemRequest(
            product_id=line.product_id,
            quantity=line.quantity,
            price=line.unit_price,
            tax_rate=LINE_TAX_RATE,
            discount=line.discount,
            is_inventory_managed=line.product.is_inventory_managed,
        )
        for line in draft.items
    ]
    return CreateSaleRequest(
        customer_id=draft.customer_id,
        customer_name=draft.customer_name,
        cash_register_id=shift.cash_register_id,
        shift_id=shift.id,
        warehouse_id=shift.warehouse_id,
        payment_method=payment.method,
        order_type=draft.order_type,
        sale_name=draft.sale_name,
        coupon_id=draft.coupon_id,
        discount_percentage=draft.discount_percentage,
        subtotal=totals.subtotal,
        discount=totals.discount_amount,
        tax=totals.tax,
        total=totals.total,
        amount_received=payment.amount_received,
        change=payment.change,
        items=items,
    )
