"""Authentication glue between the dispatcher and the auth capability.

Token verification lives in an injected ``AuthService``. This module
only decides whether to call it, what to hand it, and what to do when
it fails: any failure is treated as "no principal" and the request
continues as ``ANONYMOUS``. Whether anonymous is acceptable is the
route's ``AuthRequirement``, checked by the dispatcher.

Usage::

    class BearerTokenAuth:
        async def authenticate(self, auth_input: AuthInput) -> Principal | None:
            token = auth_input.headers.get("authorization", "").removeprefix("Bearer ")
            ...

    dispatcher = Dispatcher(packages, BearerTokenAuth(), config)
"""

import logging
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from tenantkit._internal.invoke import invoke
from tenantkit.domain.principal import AnyPrincipal, Principal, resolve_principal
from tenantkit.http.request import Request
from tenantkit.routing.route import AuthRequirement

logger = logging.getLogger("tenantkit.auth")


@dataclass(frozen=True, slots=True)
class AuthInput:
    """What the auth capability sees: lower-cased headers and cookies."""

    headers: Mapping[str, str]
    cookies: Mapping[str, str] = field(default_factory=dict)


@runtime_checkable
class AuthService(Protocol):
    """Resolves a principal from request credentials.

    ``authenticate`` may be sync or async and may return ``None`` (or
    raise) when no valid credentials are present.
    """

    def authenticate(
        self, auth_input: AuthInput
    ) -> Principal | None | Awaitable[Principal | None]: ...


def requires_authentication_call(requirement: AuthRequirement) -> bool:
    """``NONE`` routes never touch the auth capability."""
    return requirement is not AuthRequirement.NONE


async def authenticate_request(request: Request, auth_service: AuthService) -> AnyPrincipal:
    """Call the auth capability for *request*; never raises.

    Cookies are always passed as an empty mapping; cookie-based sessions
    are not part of this API.
    """
    auth_input = AuthInput(headers=request.headers.normalized(), cookies={})
    try:
        candidate = await invoke(auth_service.authenticate, auth_input)
    except Exception as exc:
        logger.warning("Authentication failed for %s %s: %s", request.method, request.path, exc)
        return resolve_principal(None)
    return resolve_principal(candidate)
