"""Organization membership endpoints."""

from tenantkit.handlers.base import field_of, organization_param, use_case_handler
from tenantkit.handlers.schemas import (
    AcceptInvitationBody,
    AddMemberBody,
    MemberParams,
    MemberRoleParams,
    OrganizationParams,
    RemoveMemberQuery,
    UpdateMemberRoleBody,
)
from tenantkit.handlers.use_cases import UseCases
from tenantkit.middleware.validation import SchemaValidator
from tenantkit.routing.route import HandlerPackage, RouteDeclaration

ADD_ORGANIZATION_MEMBER_ROUTE = RouteDeclaration("POST", "/organizations/:organizationId/members")
ACCEPT_ORGANIZATION_INVITATION_ROUTE = RouteDeclaration(
    "POST", "/organizations/:organizationId/accept"
)
UPDATE_ORGANIZATION_MEMBER_ROLE_ROUTE = RouteDeclaration(
    "PUT", "/organizations/:organizationId/members/:userId/role"
)
# Must precede the generic remove route: "me" would otherwise bind to :userId
LEAVE_ORGANIZATION_ROUTE = RouteDeclaration("DELETE", "/organizations/:organizationId/members/me")
REMOVE_ORGANIZATION_MEMBER_ROUTE = RouteDeclaration(
    "DELETE", "/organizations/:organizationId/members/:userId"
)


def _member_location(membership: object) -> str:
    organization_id = field_of(membership, "organization_id", "organizationId")
    user_id = field_of(membership, "user_id", "userId")
    return f"/organizations/{organization_id}/members/{user_id}"


def add_organization_member_package(use_cases: UseCases) -> HandlerPackage:
    """``POST /organizations/:organizationId/members``: invite by username, 201."""
    return HandlerPackage(
        route=ADD_ORGANIZATION_MEMBER_ROUTE,
        schema=SchemaValidator(params=OrganizationParams, body=AddMemberBody),
        handler=use_case_handler(
            use_cases.memberships.add_organization_member,
            action="ADD_ORGANIZATION_MEMBER",
            build_input=lambda ctx: {
                "principal_external_id": ctx.principal.external_id,
                "organization_id": organization_param(ctx),
                "username": ctx.input.body.username,
                "role_code": ctx.input.body.role_code,
            },
            organization_id=organization_param,
            status=201,
            location=_member_location,
        ),
    )


def accept_organization_invitation_package(use_cases: UseCases) -> HandlerPackage:
    return HandlerPackage(
        route=ACCEPT_ORGANIZATION_INVITATION_ROUTE,
        schema=SchemaValidator(params=OrganizationParams, body=AcceptInvitationBody),
        handler=use_case_handler(
            use_cases.memberships.accept_organization_invitation,
            action="ACCEPT_ORGANIZATION_INVITATION",
            build_input=lambda ctx: {
                "principal_external_id": ctx.principal.external_id,
                "organization_id": organization_param(ctx),
                "username": ctx.input.body.username,
            },
            organization_id=organization_param,
        ),
    )


def update_organization_member_role_package(use_cases: UseCases) -> HandlerPackage:
    return HandlerPackage(
        route=UPDATE_ORGANIZATION_MEMBER_ROLE_ROUTE,
        schema=SchemaValidator(params=MemberRoleParams, body=UpdateMemberRoleBody),
        handler=use_case_handler(
            use_cases.memberships.update_organization_member_role,
            action="UPDATE_ORGANIZATION_MEMBER_ROLE",
            build_input=lambda ctx: {
                "principal_external_id": ctx.principal.external_id,
                "organization_id": organization_param(ctx),
                "target_user_id": str(ctx.input.params.user_id),
                "role_code": ctx.input.body.role_code,
            },
            organization_id=organization_param,
        ),
    )


def leave_organization_package(use_cases: UseCases) -> HandlerPackage:
    return HandlerPackage(
        route=LEAVE_ORGANIZATION_ROUTE,
        schema=SchemaValidator(params=OrganizationParams),
        handler=use_case_handler(
            use_cases.memberships.leave_organization,
            action="LEAVE_ORGANIZATION",
            build_input=lambda ctx: {
                "organization_id": organization_param(ctx),
                "principal_external_id": ctx.principal.external_id,
            },
            organization_id=organization_param,
        ),
    )


def remove_organization_member_package(use_cases: UseCases) -> HandlerPackage:
    """``DELETE /organizations/:organizationId/members/:userId``: 204.

    With ``?username=...`` present, ``userId`` is treated as a username.
    """
    return HandlerPackage(
        route=REMOVE_ORGANIZATION_MEMBER_ROUTE,
        schema=SchemaValidator(params=MemberParams, query=RemoveMemberQuery),
        handler=use_case_handler(
            use_cases.memberships.remove_organization_member,
            action="REMOVE_ORGANIZATION_MEMBER",
            build_input=lambda ctx: {
                "principal_external_id": ctx.principal.external_id,
                "organization_id": organization_param(ctx),
                "target_user": ctx.input.params.user_id,
                "remove_by_username": ctx.input.query.username is not None,
            },
            organization_id=organization_param,
            status=204,
        ),
    )
