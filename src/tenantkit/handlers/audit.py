"""Operation context passed to every use case for audit logging."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from tenantkit.domain.principal import AnyPrincipal

# Actor recorded when no principal is authenticated
SYSTEM_ACTOR_ID = "00000000-0000-0000-0000-000000000000"


def _api_metadata() -> dict[str, Any]:
    return {"source": "api"}


@dataclass(frozen=True, slots=True)
class OperationContext:
    """Who did what, on which organization, within which request."""

    request_id: str
    actor_user_id: str
    organization_id: str | None = None
    audit_action: str | None = None
    metadata: Mapping[str, Any] = field(default_factory=_api_metadata)


def build_operation_context(
    request_id: str,
    principal: AnyPrincipal,
    audit_action: str | None = None,
    organization_id: str | None = None,
    **metadata: Any,
) -> OperationContext:
    """Build the audit context for a handler call.

    Extra keyword arguments (``ip_address``, ``user_agent``, ...) are
    merged into ``metadata`` after ``source``.
    """
    return OperationContext(
        request_id=request_id,
        actor_user_id=principal.external_id or SYSTEM_ACTOR_ID,
        organization_id=organization_id,
        audit_action=audit_action,
        metadata={**_api_metadata(), **metadata},
    )
