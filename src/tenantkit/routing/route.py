"""Route declarations and their compiled form."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from tenantkit.context import Handler


class AuthRequirement(Enum):
    """Per-route authentication policy."""

    REQUIRED = "required"
    OPTIONAL = "optional"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class RouteDeclaration:
    """A ``(method, path template, auth requirement)`` triple.

    Path templates mark parameters with a leading ``:``::

        RouteDeclaration("DELETE", "/organizations/:organizationId/members/:userId",
                         AuthRequirement.REQUIRED)
    """

    method: str
    path: str
    auth: AuthRequirement = AuthRequirement.REQUIRED


@dataclass(frozen=True, slots=True)
class HandlerPackage:
    """A route bound to its input schema and handler.

    ``schema`` is any object with a ``validate(candidate)`` method
    (see ``tenantkit.middleware.validation.Validator``), or ``None`` to
    pass the raw request parts through unchecked.
    """

    route: RouteDeclaration
    handler: Handler
    schema: Any = None


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a path template.

    Static:  ``users``  (is_param=False)
    Param:   ``:id``    (is_param=True, param_name="id")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None


@dataclass(frozen=True, slots=True)
class CompiledRoute:
    """A route declaration compiled into a whole-path matcher.

    Derived once when the router is built and never mutated.
    """

    method: str
    pattern: re.Pattern[str]
    param_names: tuple[str, ...]
    package: HandlerPackage

    @property
    def declaration(self) -> RouteDeclaration:
        return self.package.route

    @property
    def auth(self) -> AuthRequirement:
        return self.package.route.auth


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: CompiledRoute
    params: dict[str, str]

    @property
    def package(self) -> HandlerPackage:
        return self.route.package
