"""Request schemas for the built-in handlers.

Python attribute names are snake_case; the wire format is camelCase
(``organizationId``, ``newOwnerId``), so validation issues name the
field the client actually sent.
"""

from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 20

type OrganizationRole = Literal["owner", "admin", "member"]


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OpenApiModel(ApiModel):
    """Body with no fixed fields; application-defined custom fields pass through."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


# --- Users -------------------------------------------------------------------


class CreateUserBody(ApiModel):
    external_id: str
    username: str


class UpdateUserBody(OpenApiModel):
    pass


# --- Organizations -----------------------------------------------------------


class CreateOrganizationBody(OpenApiModel):
    pass


class UpdateOrganizationBody(OpenApiModel):
    pass


class OrganizationIdParams(ApiModel):
    """``/organizations/:id``"""

    id: UUID


class OrganizationParams(ApiModel):
    """``/organizations/:organizationId/...``"""

    organization_id: UUID


class ListMembersQuery(ApiModel):
    """Filters and paging for the member listing.

    The ``include*`` flags are true only for the literal string ``"true"``;
    ``pageSize`` is capped at 100.
    """

    include_active: bool = False
    include_pending: bool = False
    include_removed: bool = False
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)

    @field_validator("include_active", "include_pending", "include_removed", mode="before")
    @classmethod
    def literal_true(cls, v: object) -> bool:
        if isinstance(v, str):
            return v == "true"
        return bool(v)

    @field_validator("page_size")
    @classmethod
    def cap_page_size(cls, v: int) -> int:
        return min(v, MAX_PAGE_SIZE)


class TransferOwnershipBody(ApiModel):
    new_owner_id: UUID


# --- Memberships -------------------------------------------------------------


class AddMemberBody(ApiModel):
    username: str
    role_code: OrganizationRole


class AcceptInvitationBody(ApiModel):
    username: str


class MemberParams(ApiModel):
    """``/organizations/:organizationId/members/:userId`` where ``userId`` may be a username."""

    organization_id: UUID
    user_id: str


class MemberRoleParams(ApiModel):
    organization_id: UUID
    user_id: UUID


class UpdateMemberRoleBody(ApiModel):
    role_code: OrganizationRole


class RemoveMemberQuery(ApiModel):
    """Presence of ``username`` means ``userId`` is a username, not an id."""

    username: str | None = None
