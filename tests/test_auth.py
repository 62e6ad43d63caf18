"""Tests for the authentication gate."""

import logging

from conftest import EXTERNAL_ID, VALID_TOKEN, StaticAuth

from tenantkit import (
    ANONYMOUS,
    AuthInput,
    AuthRequirement,
    Dispatcher,
    HandlerContext,
    HandlerPackage,
    HandlerResult,
    PipelineConfig,
    Principal,
    RouteDeclaration,
)
from tenantkit.testing import TestClient


class RecordingHandler:
    def __init__(self) -> None:
        self.contexts: list[HandlerContext] = []

    def __call__(self, ctx: HandlerContext) -> HandlerResult:
        self.contexts.append(ctx)
        return HandlerResult(status=200, body={"externalId": ctx.principal.external_id})


def _api(auth: object, requirement: AuthRequirement, handler: RecordingHandler) -> Dispatcher:
    package = HandlerPackage(route=RouteDeclaration("GET", "/things", requirement), handler=handler)
    return Dispatcher([package], auth, PipelineConfig(base_path="/api"))


class AsyncAuth:
    async def authenticate(self, auth_input: AuthInput) -> Principal | None:
        if auth_input.headers.get("authorization") == VALID_TOKEN:
            return Principal("async-user")
        return None


class ExplodingAuth:
    def authenticate(self, auth_input: AuthInput) -> Principal | None:
        raise RuntimeError("token service unreachable")


class EmptyIdAuth:
    def authenticate(self, auth_input: AuthInput) -> Principal:
        return Principal("")


class TestRequiredRoutes:
    async def test_valid_credentials(self) -> None:
        auth, handler = StaticAuth(), RecordingHandler()
        async with TestClient(_api(auth, AuthRequirement.REQUIRED, handler)) as client:
            response = await client.get("/api/things", headers={"Authorization": VALID_TOKEN})
        assert response.status == 200
        assert response.json() == {"externalId": EXTERNAL_ID}
        assert len(auth.calls) == 1
        assert handler.contexts[0].principal == Principal(EXTERNAL_ID)

    async def test_missing_credentials_is_401_and_handler_skipped(self) -> None:
        auth, handler = StaticAuth(), RecordingHandler()
        async with TestClient(_api(auth, AuthRequirement.REQUIRED, handler)) as client:
            response = await client.get("/api/things")
        assert response.status == 401
        error = response.json()["error"]
        assert error["code"] == "UNAUTHORIZED"
        assert error["message"] == "Authentication required"
        assert len(auth.calls) == 1
        assert handler.contexts == []

    async def test_raising_auth_service_is_401(self, caplog) -> None:
        handler = RecordingHandler()
        with caplog.at_level(logging.WARNING, logger="tenantkit.auth"):
            async with TestClient(_api(ExplodingAuth(), AuthRequirement.REQUIRED, handler)) as client:
                response = await client.get("/api/things", headers={"Authorization": VALID_TOKEN})
        assert response.status == 401
        assert handler.contexts == []
        assert "token service unreachable" in caplog.text

    async def test_empty_external_id_is_anonymous(self) -> None:
        handler = RecordingHandler()
        async with TestClient(_api(EmptyIdAuth(), AuthRequirement.REQUIRED, handler)) as client:
            response = await client.get("/api/things")
        assert response.status == 401

    async def test_async_auth_service(self) -> None:
        handler = RecordingHandler()
        async with TestClient(_api(AsyncAuth(), AuthRequirement.REQUIRED, handler)) as client:
            response = await client.get("/api/things", headers={"Authorization": VALID_TOKEN})
        assert response.status == 200
        assert response.json() == {"externalId": "async-user"}


class TestOptionalRoutes:
    async def test_anonymous_reaches_handler(self) -> None:
        auth, handler = StaticAuth(), RecordingHandler()
        async with TestClient(_api(auth, AuthRequirement.OPTIONAL, handler)) as client:
            response = await client.get("/api/things")
        assert response.status == 200
        assert len(auth.calls) == 1
        assert handler.contexts[0].principal is ANONYMOUS

    async def test_authenticated_principal_passed(self) -> None:
        handler = RecordingHandler()
        async with TestClient(_api(StaticAuth(), AuthRequirement.OPTIONAL, handler)) as client:
            await client.get("/api/things", headers={"Authorization": VALID_TOKEN})
        assert handler.contexts[0].principal.external_id == EXTERNAL_ID

    async def test_raising_auth_service_degrades_to_anonymous(self) -> None:
        handler = RecordingHandler()
        async with TestClient(_api(ExplodingAuth(), AuthRequirement.OPTIONAL, handler)) as client:
            response = await client.get("/api/things")
        assert response.status == 200
        assert handler.contexts[0].principal is ANONYMOUS


class TestPublicRoutes:
    async def test_auth_service_never_called(self) -> None:
        auth, handler = StaticAuth(), RecordingHandler()
        async with TestClient(_api(auth, AuthRequirement.NONE, handler)) as client:
            response = await client.get("/api/things", headers={"Authorization": VALID_TOKEN})
        assert response.status == 200
        assert auth.calls == []
        assert handler.contexts[0].principal is ANONYMOUS


class TestAuthInput:
    async def test_headers_lowercased_and_cookies_empty(self) -> None:
        auth = StaticAuth()
        async with TestClient(_api(auth, AuthRequirement.REQUIRED, RecordingHandler())) as client:
            await client.get(
                "/api/things",
                headers={"Authorization": VALID_TOKEN, "X-Client-Info": "web/1.2"},
            )
        auth_input = auth.calls[0]
        assert auth_input.headers["authorization"] == VALID_TOKEN
        assert auth_input.headers["x-client-info"] == "web/1.2"
        assert dict(auth_input.cookies) == {}

    async def test_unmatched_route_never_authenticates(self) -> None:
        auth = StaticAuth()
        async with TestClient(_api(auth, AuthRequirement.REQUIRED, RecordingHandler())) as client:
            response = await client.get("/api/elsewhere", headers={"Authorization": VALID_TOKEN})
        assert response.status == 404
        assert auth.calls == []
