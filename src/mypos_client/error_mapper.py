from __future__ import annotations

from typing import Any, Mapping

from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    NotFoundError,
    PermissionError,
    RateLimitError,
    ServerError,
    ValidationError,
)

GENERIC_MESSAGE = "Request failed"

STATUS_ERRORS: dict[int, type[ApiError]] = {
    400: ValidationError,
    401: AuthError,
    403: PermissionError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
    429: RateLimitError,
}


def error_type_for(status_code: int) -> type[ApiError]:
    if status_code >= 500:
        return ServerError
    return STATUS_ERRORS.get(status_code, ApiError)


def _server_message(payload: Mapping[str, Any]) -> str:
    # the backend answers {"success": false, "message": ...}; older routes use "error"
    for key in ("message", "error"):
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return GENERIC_MESSAGE


def map_error(status_code: int, payload: Mapping[str, Any] | None) -> ApiError:
    payload = payload or {}
    code = payload.get("code")
    return error_type_for(status_code)(
        code=str(code) if code else f"HTTP_{status_code}",
        message=_server_message(payload),
        details=payload.get("details") or payload.get("errors"),
        status_code=status_code,
        raw_payload=dict(payload),
    )
