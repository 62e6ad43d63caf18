"""Domain values shared by handlers and the pipeline.

Errors and results are plain values; nothing here raises.
"""

from tenantkit.domain.errors import (
    BusinessRuleError,
    ConflictError,
    DomainError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from tenantkit.domain.principal import (
    ANONYMOUS,
    AnonymousPrincipal,
    AnyPrincipal,
    Principal,
    resolve_principal,
)
from tenantkit.domain.result import Failure, Page, Result, Success

__all__ = [
    "ANONYMOUS",
    "AnonymousPrincipal",
    "AnyPrincipal",
    "BusinessRuleError",
    "ConflictError",
    "DomainError",
    "Failure",
    "NotFoundError",
    "Page",
    "Principal",
    "Result",
    "Success",
    "UnauthorizedError",
    "ValidationError",
    "resolve_principal",
]
