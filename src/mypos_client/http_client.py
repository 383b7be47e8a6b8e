from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter

from .config import ClientConfig
from .device import IP_HEADER, resolve_device_ip
from .error_mapper import map_error
from .exceptions import ApiError, TransportError

logger = logging.getLogger(__name__)

UnauthorizedHook = Callable[[ApiError], None]

AUTH_STATUS_CODES = frozenset({401, 403})


@dataclass
class LastOperation:
    module: str
    operation: str
    duration_ms: int
    result: str


@dataclass
class HttpClient:
    config: ClientConfig
    session: requests.Session | None = None
    on_unauthorized: UnauthorizedHook | None = None
    device_ip: str | None = None
    last_operation: LastOperation | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=self.config.max_connections,
                pool_maxsize=self.config.max_connections,
            )
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)
        if self.device_ip is None and self.config.device_ip:
            self.device_ip = self.config.device_ip

    def _build_url(self, path: str) -> str:
        base = self.config.api_base_url.rstrip("/") + "/"
        return urljoin(base, path.lstrip("/"))

    def device_address(self) -> str:
        if self.device_ip is None:
            if self.session is None:
                raise RuntimeError("HTTP session not initialized")
            self.device_ip = resolve_device_ip(
                self.session,
                self.config.ip_lookup_url,
                timeout=self.config.connect_timeout_seconds,
            )
        return self.device_ip

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
        module: str = "unknown",
        operation: str = "unknown",
    ) -> dict[str, Any] | list[Any] | None:
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        request_headers = {"Accept": "application/json", IP_HEADER: self.device_address()}
        if headers:
            request_headers.update(headers)

        normalized_method = method.upper()
        url = self._build_url(path)
        can_retry = normalized_method in {"GET", "HEAD"}
        attempts = self.config.retries + 1 if can_retry else 1
        started = time.monotonic()
        response: requests.Response | None = None
        for attempt in range(attempts):
            try:
                response = self.session.request(
                    method=normalized_method,
                    url=url,
                    headers=request_headers,
                    json=json_body if files is None else None,
                    files=files,
                    params=params,
                    timeout=(self.config.connect_timeout_seconds, self.config.read_timeout_seconds),
                    verify=self.config.verify_ssl,
                )
            except requests.RequestException as exc:
                if attempt >= attempts - 1:
                    self._record_operation(module, operation, started, "error")
                    raise TransportError(
                        code="TRANSPORT_ERROR",
                        message=str(exc),
                        details={"type": type(exc).__name__},
                        status_code=0,
                        raw_payload=None,
                    ) from exc
            else:
                if response.status_code < 500 or attempt >= attempts - 1:
                    break
            time.sleep(self.config.retry_backoff_seconds * (2**attempt))

        if response is None:
            raise RuntimeError("HTTP request failed without response")

        if response.ok:
            self._record_operation(module, operation, started, "success")
            if not response.content:
                return None
            try:
                return response.json()
            except ValueError as exc:
                raise TransportError(
                    code="INVALID_JSON",
                    message="Response body is not valid JSON",
                    details={"status": response.status_code},
                    status_code=response.status_code,
                    raw_payload=response.text,
                ) from exc

        payload: Any
        try:
            payload = response.json()
        except ValueError:
            payload = {"message": response.text}
        self._record_operation(module, operation, started, "error")
        error = map_error(response.status_code, payload if isinstance(payload, dict) else {})
        if response.status_code in AUTH_STATUS_CODES:
            logger.warning(
                "request_unauthorized",
                extra={"status_code": response.status_code, "api_module": module, "operation": operation},
            )
            if self.on_unauthorized:
                self.on_unauthorized(error)
        raise error

    def _record_operation(self, module: str, operation: str, started: float, result: str) -> None:
        self.last_operation = LastOperation(
            module=module,
            operation=operation,
            duration_ms=int((time.monotonic() - started) * 1000),
            result=result,
        )
