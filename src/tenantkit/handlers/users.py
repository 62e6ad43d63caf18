"""User endpoints: registration and the caller's own profile."""

from tenantkit.context import HandlerContext
from tenantkit.handlers.base import field_of, use_case_handler
from tenantkit.handlers.schemas import CreateUserBody, UpdateUserBody
from tenantkit.handlers.use_cases import UseCases
from tenantkit.middleware.validation import SchemaValidator
from tenantkit.routing.route import AuthRequirement, HandlerPackage, RouteDeclaration

CREATE_USER_ROUTE = RouteDeclaration("POST", "/users", AuthRequirement.NONE)
GET_USER_ROUTE = RouteDeclaration("GET", "/users/me")
UPDATE_USER_ROUTE = RouteDeclaration("PATCH", "/users/me")
LIST_USER_ORGANIZATIONS_ROUTE = RouteDeclaration("GET", "/users/me/organizations")
DELETE_USER_ROUTE = RouteDeclaration("DELETE", "/users/me")


def _principal_only(ctx: HandlerContext) -> dict[str, str]:
    return {"principal_external_id": ctx.principal.external_id}


def create_user_package(use_cases: UseCases) -> HandlerPackage:
    """``POST /users``: open registration, 201 with ``Location``."""
    return HandlerPackage(
        route=CREATE_USER_ROUTE,
        schema=SchemaValidator(body=CreateUserBody),
        handler=use_case_handler(
            use_cases.users.create_user,
            action="CREATE_USER",
            build_input=lambda ctx: {
                "external_id": ctx.input.body.external_id,
                "username": ctx.input.body.username,
            },
            status=201,
            location=lambda user: f"/users/{field_of(user, 'id')}",
        ),
    )


def get_user_package(use_cases: UseCases) -> HandlerPackage:
    return HandlerPackage(
        route=GET_USER_ROUTE,
        handler=use_case_handler(
            use_cases.users.get_user,
            action="GET_USER",
            build_input=_principal_only,
        ),
    )


def update_user_package(use_cases: UseCases) -> HandlerPackage:
    """``PATCH /users/me``: body fields are passed through to the use case."""
    return HandlerPackage(
        route=UPDATE_USER_ROUTE,
        schema=SchemaValidator(body=UpdateUserBody),
        handler=use_case_handler(
            use_cases.users.update_user,
            action="UPDATE_USER_PROFILE",
            build_input=lambda ctx: {
                **ctx.input.body.model_dump(),
                "principal_external_id": ctx.principal.external_id,
            },
        ),
    )


def list_user_organizations_package(use_cases: UseCases) -> HandlerPackage:
    return HandlerPackage(
        route=LIST_USER_ORGANIZATIONS_ROUTE,
        handler=use_case_handler(
            use_cases.users.list_user_organizations,
            action="LIST_USER_ORGANIZATIONS",
            build_input=_principal_only,
        ),
    )


def delete_user_package(use_cases: UseCases) -> HandlerPackage:
    """``DELETE /users/me``: soft delete, answered with 200 and the user."""
    return HandlerPackage(
        route=DELETE_USER_ROUTE,
        handler=use_case_handler(
            use_cases.users.delete_user,
            action="DELETE_USER",
            build_input=_principal_only,
        ),
    )
