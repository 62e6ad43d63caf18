"""Use-case capabilities consumed by the handlers.

Use cases are supplied by the application. Each exposes a single
``execute(data, context)`` returning a ``Result``; it may be sync or
async. ``data`` is a plain dict with snake_case keys.
"""

from collections.abc import Awaitable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from tenantkit.domain.result import Result
from tenantkit.handlers.audit import OperationContext


@runtime_checkable
class UseCase(Protocol):
    def execute(
        self, data: Mapping[str, Any], context: OperationContext
    ) -> Result[Any] | Awaitable[Result[Any]]: ...


@dataclass(frozen=True, slots=True)
class UserUseCases:
    create_user: UseCase
    get_user: UseCase
    update_user: UseCase
    list_user_organizations: UseCase
    delete_user: UseCase


@dataclass(frozen=True, slots=True)
class OrganizationUseCases:
    create_organization: UseCase
    get_organization: UseCase
    update_organization: UseCase
    list_organization_members: UseCase
    delete_organization: UseCase
    archive_organization: UseCase
    restore_organization: UseCase
    transfer_organization_ownership: UseCase


@dataclass(frozen=True, slots=True)
class MembershipUseCases:
    add_organization_member: UseCase
    accept_organization_invitation: UseCase
    update_organization_member_role: UseCase
    leave_organization: UseCase
    remove_organization_member: UseCase


@dataclass(frozen=True, slots=True)
class UseCases:
    """Every use case the built-in handlers call, grouped by resource."""

    users: UserUseCases
    organizations: OrganizationUseCases
    memberships: MembershipUseCases
