from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from ..envelope import unwrap
from ..http_client import HttpClient


@dataclass
class BaseClient:
    http: HttpClient
    access_token: str | None = None

    module_name: ClassVar[str] = "api"

    def _auth_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def _request(self, method: str, path: str, **kwargs):
        headers = kwargs.pop("headers", {})
        kwargs.setdefault("module", self.module_name)
        merged = {**self._auth_headers(), **headers}
        return self.http.request(method, path, headers=merged, **kwargs)

    def _fetch(self, method: str, path: str, data_type: Any, *, operation: str, **kwargs) -> Any:
        data = self._request(method, path, operation=operation, **kwargs)
        return unwrap(data, data_type, operation=operation)


def compact(values: dict[str, Any]) -> dict[str, Any] | None:
    params = {key: value for key, value in values.items() if value is not None}
    return params or None


def coerce_model(value: Any, model_type: type[Any]):
    if isinstance(value, model_type):
        return value
    return model_type.model_validate(value)
