"""Tests for tenantkit.http.response and the ASGI sender."""

import pytest

from tenantkit.http.response import Response, json_response
from tenantkit.server.sender import encode_headers, send_response


class TestResponse:
    def test_defaults(self) -> None:
        response = Response()
        assert response.status == 200
        assert response.content_type == "application/json"
        assert response.headers == ()

    def test_with_header_replaces_case_insensitively(self) -> None:
        response = Response().with_header("X-Request-ID", "a").with_header("x-request-id", "b")
        assert response.headers == (("x-request-id", "b"),)

    def test_with_headers_keeps_order(self) -> None:
        response = Response().with_headers({"A": "1", "B": "2"})
        assert response.headers == (("A", "1"), ("B", "2"))

    def test_immutable_chain(self) -> None:
        original = Response("x")
        changed = original.with_status(201)
        assert original.status == 200
        assert changed.status == 201

    def test_header_lookup(self) -> None:
        response = Response().with_header("Location", "/users/1")
        assert response.header("location") == "/users/1"
        assert response.header("missing") is None
        assert response.header("missing", "d") == "d"

    def test_json_of_empty_body_is_none(self) -> None:
        assert Response(b"").json() is None


class TestJsonResponse:
    def test_serializes_payload(self) -> None:
        response = json_response({"a": 1}, status=201, headers={"X-Request-ID": "r"})
        assert response.status == 201
        assert response.json() == {"a": 1}
        assert response.header("x-request-id") == "r"

    def test_none_payload_has_empty_body(self) -> None:
        assert json_response(None, status=204).body_bytes == b""

    def test_unknown_types_stringified(self) -> None:
        from uuid import UUID

        value = UUID("5d3f1c2e-8b4a-4c61-a0f0-9c1d2e3f4a55")
        assert json_response({"id": value}).json() == {"id": str(value)}


class TestSendResponse:
    async def _send(self, response: Response) -> list[dict]:
        messages: list[dict] = []

        async def send(message: dict) -> None:
            messages.append(message)

        await send_response(response, send)
        return messages

    async def test_204_drops_body(self) -> None:
        messages = await self._send(Response("unexpected").with_status(204))
        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"0"
        assert messages[1]["body"] == b""

    async def test_200_preserves_body_and_headers(self) -> None:
        messages = await self._send(json_response({"ok": True}, headers={"X-Request-ID": "r-1"}))
        assert messages[0]["type"] == "http.response.start"
        assert messages[0]["status"] == 200
        headers = dict(messages[0]["headers"])
        assert headers[b"content-type"] == b"application/json"
        assert headers[b"x-request-id"] == b"r-1"
        assert headers[b"content-length"] == str(len(messages[1]["body"])).encode()
        assert messages[1]["type"] == "http.response.body"

    async def test_custom_content_type_replaces_default(self) -> None:
        response = json_response({"a": 1}, headers={"Content-Type": "application/problem+json"})
        messages = await self._send(response)
        content_types = [v for n, v in messages[0]["headers"] if n == b"content-type"]
        assert content_types == [b"application/problem+json"]


class TestEncodeHeaders:
    def test_lowercases_names(self) -> None:
        assert encode_headers([("X-Request-ID", "r-1")]) == [(b"x-request-id", b"r-1")]

    def test_latin1_values_pass(self) -> None:
        assert encode_headers([("X-Name", "café")]) == [(b"x-name", "café".encode("latin-1"))]

    def test_unencodable_value_names_header(self) -> None:
        with pytest.raises(ValueError, match="'Location'"):
            encode_headers([("Location", "/users/Łukasz")])
