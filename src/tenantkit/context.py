"""Per-request values passed between pipeline stages and handlers.

``RequestContext`` is created fresh for each inbound request and filled
in stage by stage; nothing in it is shared across requests.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from tenantkit.domain.principal import ANONYMOUS, AnyPrincipal
from tenantkit.domain.result import Failure

if TYPE_CHECKING:
    from tenantkit.routing.route import CompiledRoute


@dataclass(frozen=True, slots=True)
class HandlerContext:
    """What a use-case handler receives."""

    input: Any
    principal: AnyPrincipal
    request_id: str


@dataclass(frozen=True, slots=True)
class HandlerResult:
    """What a use-case handler returns.

    ``body`` is JSON-serializable or ``None`` (no body, e.g. 204).
    ``use_case_result`` is the ``Result`` the body was rendered from,
    when there is one.
    """

    status: int
    body: Any = None
    headers: Mapping[str, str] = field(default_factory=dict)
    use_case_result: Any = field(default=None, compare=False, repr=False)

    @property
    def is_success(self) -> bool:
        """False for a rendered ``Failure``; otherwise any status below 400."""
        if isinstance(self.use_case_result, Failure):
            return False
        return self.status < 400


type Handler = Callable[[HandlerContext], HandlerResult | Awaitable[HandlerResult]]


@dataclass(slots=True)
class RequestContext:
    """Mutable per-request state, built incrementally by the dispatcher."""

    request_id: str
    route: CompiledRoute | None = None
    path_params: dict[str, str] = field(default_factory=dict)
    principal: AnyPrincipal = ANONYMOUS
    validated_input: Any = None
