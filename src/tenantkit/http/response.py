"""HTTP response with chainable ``.with_*()`` transformations.

Each transformation returns a new Response. Every response the pipeline
produces is JSON except the CORS preflight's plain ``ok``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations."""

    body: str | bytes = ""
    status: int = 200
    content_type: str = JSON_CONTENT_TYPE
    headers: tuple[tuple[str, str], ...] = ()

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with *name* set to *value*.

        An existing header with the same (case-insensitive) name is
        replaced, so later writers override earlier ones.
        """
        lowered = name.lower()
        kept = tuple((n, v) for n, v in self.headers if n.lower() != lowered)
        return replace(self, headers=(*kept, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        """Apply ``with_header`` for each item, in order."""
        response = self
        for name, value in headers.items():
            response = response.with_header(name, value)
        return response

    def header(self, name: str, default: str | None = None) -> str | None:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for n, v in self.headers:
            if n.lower() == lowered:
                return v
        return default

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body

    def json(self) -> Any:
        """Decode the body as JSON; an empty body decodes to ``None``."""
        raw = self.body_bytes
        if not raw:
            return None
        return json.loads(raw)


def json_response(
    payload: Any,
    *,
    status: int = 200,
    headers: Mapping[str, str] | None = None,
) -> Response:
    """Serialize *payload* into a JSON Response.

    ``None`` produces an empty body (used for 204 results).
    """
    body = "" if payload is None else json.dumps(payload, default=str)
    response = Response(body=body, status=status)
    if headers:
        response = response.with_headers(headers)
    return response
