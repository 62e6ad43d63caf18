"""Built-in HTTP handlers for users, organizations and memberships.

Handlers are thin: they shape validated input for a use case, call it,
and render its ``Result``. The use cases themselves come from the
application::

    packages = build_handlers(UseCases(users=..., organizations=..., memberships=...))
"""

from tenantkit.handlers.audit import OperationContext, build_operation_context
from tenantkit.handlers.build import build_handlers
from tenantkit.handlers.use_cases import (
    MembershipUseCases,
    OrganizationUseCases,
    UseCase,
    UseCases,
    UserUseCases,
)

__all__ = [
    "MembershipUseCases",
    "OperationContext",
    "OrganizationUseCases",
    "UseCase",
    "UseCases",
    "UserUseCases",
    "build_handlers",
    "build_operation_context",
]
