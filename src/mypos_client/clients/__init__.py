from .auth import AuthClient
from .catalog_client import RESOURCES, CatalogClient, CatalogResource
from .inventory_client import InventoryClient
from .pos_client import PosClient
from .reports_client import ReportsClient
from .shifts_client import ShiftsClient

__all__ = [
    "AuthClient",
    "CatalogClient",
    "CatalogResource",
    "InventoryClient",
    "PosClient",
    "RESOURCES",
    "ReportsClient",
    "ShiftsClient",
]
