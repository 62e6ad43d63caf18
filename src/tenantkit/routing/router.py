"""Compiled router with ordered, first-match lookup.

Routes are compiled once when the router is built and never change
afterwards. Lookup scans them in registration order and returns the
first one whose method and anchored pattern both match. There is no
specificity ranking: when two templates overlap, the one declared
first wins, so callers must list specific routes (``/members/me``)
before generic ones (``/members/:userId``).
"""

import re

from tenantkit.errors import ConfigurationError
from tenantkit.routing.route import CompiledRoute, HandlerPackage, PathSegment, RouteMatch

PARAM_MARKER = ":"

_PARAM_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# One path segment: anything but a slash
_SEGMENT_PATTERN = "([^/]+)"


def normalize_base_path(base_path: str) -> str:
    """``"api/"`` -> ``"/api"``; empty stays empty."""
    stripped = base_path.strip("/")
    return f"/{stripped}" if stripped else ""


def parse_path(path: str) -> list[PathSegment]:
    """Parse a path template into segments.

    Examples::

        "/users"          -> [PathSegment("users")]
        "/users/:id"      -> [PathSegment("users"), PathSegment(":id", is_param=True, ...)]

    Raises ``ConfigurationError`` for a marker without a valid name
    (``/users/:`` or ``/users/:1st``).
    """
    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if part.startswith(PARAM_MARKER):
            name = part[len(PARAM_MARKER) :]
            if not _PARAM_NAME_RE.match(name):
                msg = f"Invalid path parameter {part!r} in route template {path!r}."
                raise ConfigurationError(msg)
            segments.append(PathSegment(value=part, is_param=True, param_name=name))
        else:
            segments.append(PathSegment(value=part))
    return segments


def compile_route(package: HandlerPackage, base_path: str = "") -> CompiledRoute:
    """Compile one declaration into a method-aware, whole-path matcher.

    The pattern has no anchors of its own; ``Router.match`` applies it
    with ``fullmatch``, so a trailing newline never matches.
    """
    segments = parse_path(package.route.path)
    param_names: list[str] = []
    parts: list[str] = []
    for seg in segments:
        if seg.is_param and seg.param_name is not None:
            if seg.param_name in param_names:
                msg = (
                    f"Duplicate path parameter {seg.param_name!r} "
                    f"in route template {package.route.path!r}."
                )
                raise ConfigurationError(msg)
            param_names.append(seg.param_name)
            parts.append(_SEGMENT_PATTERN)
        else:
            parts.append(re.escape(seg.value))

    prefix = re.escape(normalize_base_path(base_path))
    body = "/" + "/".join(parts) if parts else "/"
    return CompiledRoute(
        method=package.route.method.upper(),
        pattern=re.compile(prefix + body),
        param_names=tuple(param_names),
        package=package,
    )


class Router:
    """Ordered route table with first-match lookup.

    Usage::

        router = Router("/api", packages)
        match = router.match("GET", "/api/organizations/org-1/members/mem-2")
        if match is not None:
            match.params  # {"organizationId": "org-1", "memberId": "mem-2"}
    """

    __slots__ = ("_base_path", "_routes")

    def __init__(self, base_path: str = "", packages: tuple[HandlerPackage, ...] = ()) -> None:
        self._base_path = normalize_base_path(base_path)
        self._routes: tuple[CompiledRoute, ...] = tuple(
            compile_route(package, self._base_path) for package in packages
        )

    @property
    def base_path(self) -> str:
        return self._base_path

    @property
    def routes(self) -> tuple[CompiledRoute, ...]:
        """Compiled routes in registration order."""
        return self._routes

    def __len__(self) -> int:
        return len(self._routes)

    def match(self, method: str, pathname: str) -> RouteMatch | None:
        """Return the first route matching *method* and *pathname*, or ``None``.

        Method comparison is case-insensitive; the path must match the
        whole template with the exact segment count. Parameter values
        are the raw segment text.
        """
        wanted = method.upper()
        for route in self._routes:
            if route.method != wanted:
                continue
            found = route.pattern.fullmatch(pathname)
            if found is not None:
                return RouteMatch(route=route, params=dict(zip(route.param_names, found.groups())))
        return None
