from .auth_service import AuthService
from .catalog_service import CatalogService
from .checkout_service import CheckoutService
from .errors import (
    CatalogServiceError,
    CheckoutError,
    ParkedOrderError,
    ReportsError,
    ServiceError,
    ShiftServiceError,
)
from .parked_orders_service import ParkedOrdersService, ReloadResult
from .product_search_service import ProductSearchService
from .reports_service import ReportsService
from .shift_service import ShiftGuard
from .terminal import AddProductResult, PosTerminal, ScanResult

__all__ = [
    "AddProductResult",
    "AuthService",
    "CatalogService",
    "CatalogServiceError",
    "CheckoutError",
    "CheckoutService",
    "ParkedOrderError",
    "ParkedOrdersService",
    "PosTerminal",
    "ProductSearchService",
    "ReloadResult",
    "ReportsError",
    "ReportsService",
    "ScanResult",
    "ServiceError",
    "ShiftGuard",
    "ShiftServiceError",
]
