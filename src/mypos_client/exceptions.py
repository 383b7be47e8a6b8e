from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: object | None
    status_code: int
    raw_payload: object | None = None

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.code}: {self.message}"


class UnauthorizedError(ApiError):
    pass


class ForbiddenError(ApiError):
    pass


class NotFoundError(ApiError):
    pass


class ValidationError(ApiError):
    pass


class AuthError(UnauthorizedError):
    """Authentication failed or the token is no longer valid."""


class PermissionError(ForbiddenError):
    """The backend refused the operation for this user."""


class ConflictError(ApiError):
    """409 or conflict-style errors."""


class RateLimitError(ApiError):
    """429 throttling error."""


class ServerError(ApiError):
    """5xx server-side failures."""


class TransportError(ApiError):
    """Network/transport failure before an HTTP response was returned."""


class ResponseShapeError(ApiError):
    """A 2xx response did not match the agreed envelope."""


@dataclass(frozen=True)
class ValidationIssue:
    field: str
    reason: str


@dataclass
class ClientValidationError(ValueError):
    """Input rejected locally, before any request is sent."""

    issues: list[ValidationIssue] = field(default_factory=list)

    def __str__(self) -> str:
        return "; ".join(f"{issue.field}: {issue.reason}" for issue in self.issues) or "validation failed"


class EmptyCartError(ClientValidationError):
    pass


class InsufficientPaymentError(ClientValidationError):
    pass


class CouponRejectedError(ClientValidationError):
    pass


@dataclass
class ShiftRequiredError(Exception):
    """No open shift for the current user; sales cannot be finalized."""

    message: str = "An open shift is required before processing sales"

    def __str__(self) -> str:
        return self.message


@dataclass
class ProductNotFoundError(LookupError):
    code: str

    def __str__(self) -> str:
        return f"No product found for code {self.code!r}"
