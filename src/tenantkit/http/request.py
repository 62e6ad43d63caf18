"""Immutable HTTP request.

Frozen metadata with async body access. The dispatcher builds one per
inbound ASGI call and drops it once the response is sent.
"""

from __future__ import annotations

import json
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from typing import Any

from tenantkit._internal.asgi import Receive, Scope
from tenantkit.http.headers import Headers
from tenantkit.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Metadata is frozen at creation. Body is read asynchronously via
    ``.body()`` or ``.json()`` and cached after the first read.
    """

    method: str
    path: str
    headers: Headers
    query: QueryParams
    http_version: str
    client: tuple[str, int] | None

    _receive: Receive

    # dict contents stay mutable even though the field reference is frozen
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def is_json(self) -> bool:
        return "application/json" in (self.content_type or "")

    async def body(self) -> bytes:
        """Read the full request body (cached)."""
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks = [chunk async for chunk in self.stream()]
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncGenerator[bytes]:
        """Stream the request body in chunks."""
        while True:
            message = await self._receive()
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def json(self) -> Any:
        """Parse the body as JSON.

        Raises ``ValueError`` (``json.JSONDecodeError``) on malformed input.
        """
        raw = await self.body()
        return json.loads(raw)

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query=QueryParams(scope.get("query_string", b"")),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
            _receive=receive,
        )
