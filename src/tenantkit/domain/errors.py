"""Domain error taxonomy.

A closed set of frozen value types. Use cases return them inside a
``Failure`` instead of raising, and ``tenantkit.http.error_mapper``
matches over the ``DomainError`` union exhaustively. Adding a kind
here means adding a case there.
"""

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar


@dataclass(frozen=True, slots=True)
class ValidationError:
    """Input failed a domain-level validation rule."""

    message: str
    field: str | None = None
    extra: Mapping[str, Any] = dataclasses.field(default_factory=dict)

    code: ClassVar[str] = "VALIDATION_ERROR"

    @property
    def details(self) -> dict[str, Any]:
        return {"field": self.field, **self.extra}


@dataclass(frozen=True, slots=True)
class UnauthorizedError:
    """The principal may not perform *action* (optionally on *resource*)."""

    action: str
    resource: str | None = None
    extra: Mapping[str, Any] = dataclasses.field(default_factory=dict)

    code: ClassVar[str] = "UNAUTHORIZED"

    @property
    def message(self) -> str:
        if self.resource:
            return f"Not authorized to {self.action} on {self.resource}"
        return f"Not authorized to {self.action}"

    @property
    def details(self) -> dict[str, Any]:
        return {"action": self.action, "resource": self.resource, **self.extra}


@dataclass(frozen=True, slots=True)
class NotFoundError:
    """A resource looked up by *identifier* does not exist."""

    resource: str
    identifier: str
    extra: Mapping[str, Any] = dataclasses.field(default_factory=dict)

    code: ClassVar[str] = "NOT_FOUND"

    @property
    def message(self) -> str:
        return f"{self.resource} with identifier '{self.identifier}' not found"

    @property
    def details(self) -> dict[str, Any]:
        return {"resource": self.resource, "identifier": self.identifier, **self.extra}


@dataclass(frozen=True, slots=True)
class ConflictError:
    """A resource with *identifier* already exists."""

    resource: str
    identifier: str
    extra: Mapping[str, Any] = dataclasses.field(default_factory=dict)

    code: ClassVar[str] = "CONFLICT"

    @property
    def message(self) -> str:
        return f"{self.resource} with identifier '{self.identifier}' already exists"

    @property
    def details(self) -> dict[str, Any]:
        return {"resource": self.resource, "identifier": self.identifier, **self.extra}


@dataclass(frozen=True, slots=True)
class BusinessRuleError:
    """A business invariant was violated (e.g. removing the last owner)."""

    message: str
    extra: Mapping[str, Any] = dataclasses.field(default_factory=dict)

    code: ClassVar[str] = "BUSINESS_RULE_VIOLATION"

    @property
    def details(self) -> dict[str, Any] | None:
        return dict(self.extra) or None


type DomainError = (
    ValidationError | UnauthorizedError | NotFoundError | ConflictError | BusinessRuleError
)
