"""Organization endpoints."""

from typing import Any

from tenantkit.context import HandlerContext
from tenantkit.handlers.base import field_of, organization_param, use_case_handler
from tenantkit.handlers.schemas import (
    CreateOrganizationBody,
    ListMembersQuery,
    OrganizationIdParams,
    OrganizationParams,
    TransferOwnershipBody,
    UpdateOrganizationBody,
)
from tenantkit.handlers.use_cases import UseCases
from tenantkit.middleware.validation import SchemaValidator
from tenantkit.routing.route import HandlerPackage, RouteDeclaration

CREATE_ORGANIZATION_ROUTE = RouteDeclaration("POST", "/organizations")
LIST_ORGANIZATION_MEMBERS_ROUTE = RouteDeclaration("GET", "/organizations/:organizationId/members")
ARCHIVE_ORGANIZATION_ROUTE = RouteDeclaration("POST", "/organizations/:organizationId/archive")
RESTORE_ORGANIZATION_ROUTE = RouteDeclaration("POST", "/organizations/:organizationId/restore")
TRANSFER_ORGANIZATION_OWNERSHIP_ROUTE = RouteDeclaration(
    "POST", "/organizations/:organizationId/transfer-ownership"
)
GET_ORGANIZATION_ROUTE = RouteDeclaration("GET", "/organizations/:id")
UPDATE_ORGANIZATION_ROUTE = RouteDeclaration("PATCH", "/organizations/:id")
DELETE_ORGANIZATION_ROUTE = RouteDeclaration("DELETE", "/organizations/:organizationId")

_ORGANIZATION_PARAMS = SchemaValidator(params=OrganizationParams)


def _id_param(ctx: HandlerContext) -> str:
    return str(ctx.input.params.id)


def _organization_and_principal(ctx: HandlerContext) -> dict[str, Any]:
    return {
        "organization_id": organization_param(ctx),
        "principal_external_id": ctx.principal.external_id,
    }


def create_organization_package(use_cases: UseCases) -> HandlerPackage:
    """``POST /organizations``: the caller becomes owner; 201 with ``Location``."""
    return HandlerPackage(
        route=CREATE_ORGANIZATION_ROUTE,
        schema=SchemaValidator(body=CreateOrganizationBody),
        handler=use_case_handler(
            use_cases.organizations.create_organization,
            action="CREATE_ORGANIZATION",
            build_input=lambda ctx: {
                **ctx.input.body.model_dump(),
                "principal_external_id": ctx.principal.external_id,
            },
            status=201,
            location=lambda organization: f"/organizations/{field_of(organization, 'id')}",
        ),
    )


def _list_members_input(ctx: HandlerContext) -> dict[str, Any]:
    query: ListMembersQuery = ctx.input.query
    return {
        "organization_id": organization_param(ctx),
        "principal_external_id": ctx.principal.external_id,
        "options": {
            "include_active": query.include_active,
            "include_pending": query.include_pending,
            "include_removed": query.include_removed,
            "page": query.page,
            "page_size": query.page_size,
        },
    }


def list_organization_members_package(use_cases: UseCases) -> HandlerPackage:
    """``GET /organizations/:organizationId/members``: paginated envelope."""
    return HandlerPackage(
        route=LIST_ORGANIZATION_MEMBERS_ROUTE,
        schema=SchemaValidator(params=OrganizationParams, query=ListMembersQuery),
        handler=use_case_handler(
            use_cases.organizations.list_organization_members,
            action="LIST_ORGANIZATION_MEMBERS",
            build_input=_list_members_input,
            organization_id=organization_param,
        ),
    )


def archive_organization_package(use_cases: UseCases) -> HandlerPackage:
    return HandlerPackage(
        route=ARCHIVE_ORGANIZATION_ROUTE,
        schema=_ORGANIZATION_PARAMS,
        handler=use_case_handler(
            use_cases.organizations.archive_organization,
            action="ARCHIVE_ORGANIZATION",
            build_input=_organization_and_principal,
            organization_id=organization_param,
        ),
    )


def restore_organization_package(use_cases: UseCases) -> HandlerPackage:
    return HandlerPackage(
        route=RESTORE_ORGANIZATION_ROUTE,
        schema=_ORGANIZATION_PARAMS,
        handler=use_case_handler(
            use_cases.organizations.restore_organization,
            action="RESTORE_ORGANIZATION",
            build_input=_organization_and_principal,
            organization_id=organization_param,
        ),
    )


def transfer_organization_ownership_package(use_cases: UseCases) -> HandlerPackage:
    return HandlerPackage(
        route=TRANSFER_ORGANIZATION_OWNERSHIP_ROUTE,
        schema=SchemaValidator(params=OrganizationParams, body=TransferOwnershipBody),
        handler=use_case_handler(
            use_cases.organizations.transfer_organization_ownership,
            action="TRANSFER_ORGANIZATION_OWNERSHIP",
            build_input=lambda ctx: {
                **_organization_and_principal(ctx),
                "new_owner_id": str(ctx.input.body.new_owner_id),
            },
            organization_id=organization_param,
        ),
    )


def get_organization_package(use_cases: UseCases) -> HandlerPackage:
    return HandlerPackage(
        route=GET_ORGANIZATION_ROUTE,
        schema=SchemaValidator(params=OrganizationIdParams),
        handler=use_case_handler(
            use_cases.organizations.get_organization,
            action="GET_ORGANIZATION",
            build_input=lambda ctx: {
                "organization_id": _id_param(ctx),
                "principal_external_id": ctx.principal.external_id,
            },
            organization_id=_id_param,
        ),
    )


def update_organization_package(use_cases: UseCases) -> HandlerPackage:
    return HandlerPackage(
        route=UPDATE_ORGANIZATION_ROUTE,
        schema=SchemaValidator(params=OrganizationIdParams, body=UpdateOrganizationBody),
        handler=use_case_handler(
            use_cases.organizations.update_organization,
            action="UPDATE_ORGANIZATION",
            build_input=lambda ctx: {
                **ctx.input.body.model_dump(),
                "organization_id": _id_param(ctx),
                "principal_external_id": ctx.principal.external_id,
            },
            organization_id=_id_param,
        ),
    )


def delete_organization_package(use_cases: UseCases) -> HandlerPackage:
    """``DELETE /organizations/:organizationId``: soft delete, 200 with the organization."""
    return HandlerPackage(
        route=DELETE_ORGANIZATION_ROUTE,
        schema=_ORGANIZATION_PARAMS,
        handler=use_case_handler(
            use_cases.organizations.delete_organization,
            action="DELETE_ORGANIZATION",
            build_input=_organization_and_principal,
            organization_id=organization_param,
        ),
    )
