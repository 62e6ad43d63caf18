"""Shared fakes for dispatcher and handler tests."""

from typing import Any

import pytest

from tenantkit import Dispatcher, PipelineConfig, Principal, Success, build_handlers
from tenantkit.handlers.use_cases import MembershipUseCases, OrganizationUseCases, UserUseCases
from tenantkit.handlers import UseCases
from tenantkit.middleware.auth import AuthInput

VALID_TOKEN = "Bearer valid-token"
EXTERNAL_ID = "ext-user-1"
ORG_ID = "0b7c53c1-7a7e-4f1e-9a47-2f5ab7a8e001"
USER_ID = "5d3f1c2e-8b4a-4c61-a0f0-9c1d2e3f4a55"


class StaticAuth:
    """Accepts one bearer token; records every call."""

    def __init__(self, tokens: dict[str, str] | None = None) -> None:
        self.tokens = tokens if tokens is not None else {VALID_TOKEN: EXTERNAL_ID}
        self.calls: list[AuthInput] = []

    def authenticate(self, auth_input: AuthInput) -> Principal | None:
        self.calls.append(auth_input)
        external_id = self.tokens.get(auth_input.headers.get("authorization", ""))
        return Principal(external_id) if external_id else None


class RecordingUseCase:
    """Returns a fixed result and records ``(data, context)`` per call."""

    def __init__(self, result: Any = None) -> None:
        self.result = result if result is not None else Success({"id": USER_ID})
        self.calls: list[tuple[Any, Any]] = []

    async def execute(self, data: Any, context: Any) -> Any:
        self.calls.append((data, context))
        return self.result


def make_use_cases(**overrides: RecordingUseCase) -> UseCases:
    """Every use case as a ``RecordingUseCase``; pass names to override."""

    def pick(name: str) -> RecordingUseCase:
        return overrides.get(name) or RecordingUseCase()

    return UseCases(
        users=UserUseCases(
            create_user=pick("create_user"),
            get_user=pick("get_user"),
            update_user=pick("update_user"),
            list_user_organizations=pick("list_user_organizations"),
            delete_user=pick("delete_user"),
        ),
        organizations=OrganizationUseCases(
            create_organization=pick("create_organization"),
            get_organization=pick("get_organization"),
            update_organization=pick("update_organization"),
            list_organization_members=pick("list_organization_members"),
            delete_organization=pick("delete_organization"),
            archive_organization=pick("archive_organization"),
            restore_organization=pick("restore_organization"),
            transfer_organization_ownership=pick("transfer_organization_ownership"),
        ),
        memberships=MembershipUseCases(
            add_organization_member=pick("add_organization_member"),
            accept_organization_invitation=pick("accept_organization_invitation"),
            update_organization_member_role=pick("update_organization_member_role"),
            leave_organization=pick("leave_organization"),
            remove_organization_member=pick("remove_organization_member"),
        ),
    )


def make_api(use_cases: UseCases, auth: StaticAuth | None = None, **config: Any) -> Dispatcher:
    config.setdefault("base_path", "/api")
    return Dispatcher(build_handlers(use_cases), auth or StaticAuth(), PipelineConfig(**config))


@pytest.fixture
def auth() -> StaticAuth:
    return StaticAuth()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": VALID_TOKEN}
