"""Routing — ordered route table with anchored, first-match lookup.

Declaration order is part of the contract: overlapping templates are
resolved by whichever was registered first.
"""

from tenantkit.routing.route import (
    AuthRequirement,
    CompiledRoute,
    HandlerPackage,
    RouteDeclaration,
    RouteMatch,
)
from tenantkit.routing.router import Router, compile_route, parse_path

__all__ = [
    "AuthRequirement",
    "CompiledRoute",
    "HandlerPackage",
    "RouteDeclaration",
    "RouteMatch",
    "Router",
    "compile_route",
    "parse_path",
]
