"""Single response envelope shared by every authenticated endpoint.

The backend answers ``{"success": bool, "data": ..., "message": str}``. The
payload is validated once here; anything else is a contract violation and
raises :class:`ResponseShapeError` instead of being guessed at.
"""
from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ApiError, ResponseShapeError

T = TypeVar("T")


class ApiEnvelope(BaseModel, Generic[T]):
    model_config = ConfigDict(extra="allow")

    success: bool | None = None
    message: str | None = None
    data: T


def unwrap(payload: Any, data_type: Any, *, operation: str = "request") -> Any:
    if not isinstance(payload, dict):
        raise ResponseShapeError(
            code="RESPONSE_SHAPE",
            message=f"Expected {operation} response to be a JSON object",
            details={"received": type(payload).__name__},
            status_code=200,
            raw_payload=payload,
        )
    try:
        envelope = ApiEnvelope[data_type].model_validate(payload)
    except PydanticValidationError as exc:
        raise ResponseShapeError(
            code="RESPONSE_SHAPE",
            message=f"Unexpected {operation} response shape",
            details=exc.errors(include_url=False),
            status_code=200,
            raw_payload=payload,
        ) from exc
    if envelope.success is False:
        raise ApiError(
            code="REQUEST_REJECTED",
            message=envelope.message or f"{operation} was rejected",
            details=None,
            status_code=200,
            raw_payload=payload,
        )
    return envelope.data


def parse_model(payload: Any, model_type: type[BaseModel], *, operation: str = "request") -> Any:
    """Validate an un-enveloped payload (login and the typed reports)."""
    try:
        return model_type.model_validate(payload)
    except PydanticValidationError as exc:
        raise ResponseShapeError(
            code="RESPONSE_SHAPE",
            message=f"Unexpected {operation} response shape",
            details=exc.errors(include_url=False),
            status_code=200,
            raw_payload=payload,
        ) from exc
