"""Domain-error-to-HTTP mapping.

Pure and total: every ``DomainError`` kind has a fixed status and code,
and anything else (a raised exception) becomes a 500. The ``match`` ends
in ``assert_never`` so a type checker flags a new domain error kind that
has no row here.

    ====================  ======  ===========================
    Domain error          Status  Code
    ====================  ======  ===========================
    ValidationError       400     VALIDATION_ERROR
    UnauthorizedError     401     UNAUTHORIZED
    NotFoundError         404     NOT_FOUND
    ConflictError         409     CONFLICT
    BusinessRuleError     422     BUSINESS_RULE_VIOLATION
    anything else         500     INTERNAL_SERVER_ERROR
    ====================  ======  ===========================
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, assert_never

from tenantkit.domain.errors import (
    BusinessRuleError,
    ConflictError,
    DomainError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)

INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


@dataclass(frozen=True, slots=True)
class HttpError:
    """A mapped error: status plus the ``{"error": {...}}`` envelope."""

    status: int
    body: dict[str, Any]

    @property
    def code(self) -> str:
        return self.body["error"]["code"]


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def error_body(
    code: str,
    message: str,
    request_id: str,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build the error envelope shared by every failure path."""
    error: dict[str, Any] = {
        "code": code,
        "message": message,
        "requestId": request_id,
        "timestamp": utc_timestamp(),
    }
    if details:
        error["details"] = details
    return {"error": error}


def status_for(error: DomainError) -> int:
    match error:
        case ValidationError():
            return 400
        case UnauthorizedError():
            return 401
        case NotFoundError():
            return 404
        case ConflictError():
            return 409
        case BusinessRuleError():
            return 422
        case _:
            assert_never(error)


def to_http_error(error: DomainError | BaseException, request_id: str) -> HttpError:
    """Map a domain error (or a raised exception) to status and body."""
    if isinstance(error, BaseException):
        return from_exception(error, request_id)
    return HttpError(
        status=status_for(error),
        body=error_body(error.code, error.message, request_id, error.details),
    )


def from_exception(exc: BaseException, request_id: str) -> HttpError:
    """The catch-all row: any non-taxonomy failure is a 500."""
    return HttpError(
        status=500,
        body=error_body(
            INTERNAL_SERVER_ERROR,
            "An unexpected error occurred",
            request_id,
            {"originalMessage": str(exc)},
        ),
    )
