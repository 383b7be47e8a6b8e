from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from .auth_store import AuthStore
from .clients.auth import AuthClient
from .clients.catalog_client import RESOURCES, CatalogClient
from .clients.inventory_client import InventoryClient
from .clients.pos_client import PosClient
from .clients.reports_client import ReportsClient
from .clients.shifts_client import ShiftsClient
from .config import ClientConfig
from .exceptions import ApiError
from .http_client import HttpClient
from .models import SessionData, UserResponse

logger = logging.getLogger(__name__)


@dataclass
class ApiSession:
    """Authenticated context shared by every client and service.

    One ``HttpClient`` is kept for the lifetime of the session so the device IP
    is resolved once and the connection pool is reused.
    """

    config: ClientConfig
    auth_store: AuthStore | None = None
    token: str | None = None
    user: UserResponse | None = None
    on_session_expired: Callable[[ApiError], None] | None = None
    http: HttpClient | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.auth_store = self.auth_store or AuthStore()
        stored = self.auth_store.load()
        if stored and not self.token:
            self.token = stored.token
            self.user = stored.user
        if self.http is None:
            self.http = HttpClient(config=self.config)
        self.http.on_unauthorized = self._handle_unauthorized

    def _handle_unauthorized(self, error: ApiError) -> None:
        had_token = self.token is not None
        self.clear()
        logger.info("session_expired", extra={"status_code": error.status_code, "had_token": had_token})
        if self.on_session_expired:
            self.on_session_expired(error)

    def auth_client(self) -> AuthClient:
        return AuthClient(http=self.http, access_token=self.token)

    def pos_client(self) -> PosClient:
        return PosClient(http=self.http, access_token=self.token)

    def shifts_client(self) -> ShiftsClient:
        return ShiftsClient(http=self.http, access_token=self.token)

    def inventory_client(self) -> InventoryClient:
        return InventoryClient(http=self.http, access_token=self.token)

    def reports_client(self) -> ReportsClient:
        return ReportsClient(http=self.http, access_token=self.token)

    def catalog_client(self, resource: str) -> CatalogClient[Any]:
        try:
            bound = RESOURCES[resource]
        except KeyError:
            raise ValueError(f"Unknown catalog resource: {resource}") from None
        return CatalogClient(http=self.http, access_token=self.token, resource=bound)

    def is_authenticated(self) -> bool:
        return self.token is not None

    def establish(self, token: str, user: UserResponse | None) -> None:
        self.token = token
        self.user = user
        self.auth_store.save(SessionData(token=token, user=user, env_name=self.config.env_name))

    def clear(self) -> None:
        self.token = None
        self.user = None
        if self.auth_store:
            self.auth_store.clear()
