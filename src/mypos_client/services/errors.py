from __future__ import annotations

from dataclasses import dataclass
from typing import TypeVar

from ..error_mapper import GENERIC_MESSAGE
from ..exceptions import ApiError, ClientValidationError


@dataclass(frozen=True)
class ServiceError(RuntimeError):
    """Failure of a terminal workflow, carrying a message fit for the user."""

    message: str
    details: str | None = None
    status_code: int | None = None

    def __str__(self) -> str:
        return self.message


class CheckoutError(ServiceError):
    pass


class ShiftServiceError(ServiceError):
    pass


class ParkedOrderError(ServiceError):
    pass


class CatalogServiceError(ServiceError):
    pass


class ReportsError(ServiceError):
    pass


E = TypeVar("E", bound=ServiceError)

def _api_message(exc: ApiError, fallback: str) -> str:
    message = exc.message.strip()
    if not message or message == GENERIC_MESSAGE:
        return fallback
    return message


def _api_details(exc: ApiError) -> str:
    details = f"{exc.code} (HTTP {exc.status_code})"
    if exc.details:
        details = f"{details}: {exc.details}"
    return details


def normalize_error(exc: Exception, error_type: type[E], fallback: str) -> E:
    if isinstance(exc, error_type):
        return exc
    if isinstance(exc, ApiError):
        return error_type(message=_api_message(exc, fallback), details=_api_details(exc), status_code=exc.status_code)
    if isinstance(exc, ClientValidationError):
        return error_type(message=str(exc))
    return error_type(message=str(exc) or fallback)


def issues_text(issues: list) -> str:
    return "; ".join(f"{issue.field}: {issue.reason}" for issue in issues)
