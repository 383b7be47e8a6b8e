from .auth_store import AuthStore
from .checkout import (
    TAX_RATE,
    CompletedSale,
    PaymentDetails,
    SaleTotals,
    build_sale_request,
    compute_pause_totals,
    compute_sale_totals,
    validate_payment,
)
from .config import ClientConfig, ConfigError, load_config
from .coupon_validation import normalize_coupon_code, validate_coupon, validate_coupon_code
from .exceptions import (
    ApiError,
    AuthError,
    ClientValidationError,
    CouponRejectedError,
    EmptyCartError,
    ForbiddenError,
    InsufficientPaymentError,
    NotFoundError,
    ProductNotFoundError,
    ResponseShapeError,
    ShiftRequiredError,
    TransportError,
    UnauthorizedError,
    ValidationError,
    ValidationIssue,
)
from .http_client import HttpClient
from .models import LoginResponse, SessionData, UserResponse
from .models_catalog import Category, Coupon, Customer, Product
from .models_pos import Sale, Shift
from .sale_draft import DEFAULT_CUSTOMER_ID, DEFAULT_CUSTOMER_NAME, CartChange, LineItem, SaleDraft
from .sequencing import DebouncedProductSearch, LatestRequestGuard
from .session import ApiSession
from .shift_validation import ShiftClosePreview, preview_shift_close

__all__ = [
    "ApiError",
    "ApiSession",
    "AuthError",
    "AuthStore",
    "CartChange",
    "Category",
    "ClientConfig",
    "ClientValidationError",
    "CompletedSale",
    "ConfigError",
    "Coupon",
    "CouponRejectedError",
    "Customer",
    "DEFAULT_CUSTOMER_ID",
    "DEFAULT_CUSTOMER_NAME",
    "DebouncedProductSearch",
    "EmptyCartError",
    "ForbiddenError",
    "HttpClient",
    "InsufficientPaymentError",
    "LatestRequestGuard",
    "LineItem",
    "LoginResponse",
    "NotFoundError",
    "PaymentDetails",
    "Product",
    "ProductNotFoundError",
    "ResponseShapeError",
    "Sale",
    "SaleDraft",
    "SaleTotals",
    "SessionData",
    "Shift",
    "ShiftClosePreview",
    "ShiftRequiredError",
    "TAX_RATE",
    "TransportError",
    "UnauthorizedError",
    "UserResponse",
    "ValidationError",
    "ValidationIssue",
    "build_sale_request",
    "compute_pause_totals",
    "compute_sale_totals",
    "load_config",
    "normalize_coupon_code",
    "preview_shift_close",
    "validate_coupon",
    "validate_coupon_code",
    "validate_payment",
]
