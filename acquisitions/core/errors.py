"""Tagged service errors shared by services, dependencies and the HTTP layer."""

from enum import Enum


class ErrorKind(str, Enum):
    """Category of a service failure; each maps to one HTTP status."""

    VALIDATION = "validation"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    RATE_LIMITED = "rate_limited"
    INTERNAL = "internal"

    @property
    def status_code(self) -> int:
        return _STATUS_BY_KIND[self]


_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.RATE_LIMITED: 429,
    ErrorKind.INTERNAL: 500,
}


class ServiceError(Exception):
    """Raised by services with an explicit ErrorKind; rendered by the app-level handler."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        self.kind = kind
        self.message = message
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return self.kind.status_code


class ValidationFailed(ServiceError):
    """Raised when request input fails schema validation; details lists field errors."""

    def __init__(self, details: list[dict[str, str]]) -> None:
        super().__init__(ErrorKind.VALIDATION, "Validation failed")
        self.details = details
