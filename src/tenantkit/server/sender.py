"""ASGI response sending — translates a Response into ASGI messages."""

from collections.abc import Iterable

from tenantkit._internal.asgi import Send
from tenantkit.http.response import Response

type RawHeaders = list[tuple[bytes, bytes]]


def body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


def encode_headers(headers: Iterable[tuple[str, str]]) -> RawHeaders:
    """Lower-cased latin-1 byte pairs.

    Raises ``ValueError`` naming the header when a name or value cannot
    be encoded.
    """
    encoded: RawHeaders = []
    for name, value in headers:
        try:
            encoded.append((name.lower().encode("latin-1"), value.encode("latin-1")))
        except UnicodeEncodeError as exc:
            msg = f"Response header {name!r} is not latin-1 encodable: {value!r}"
            raise ValueError(msg) from exc
    return encoded


def raw_headers(response: Response, body: bytes) -> RawHeaders:
    """ASGI headers for *response*.

    A ``Content-Type`` among the response's own headers replaces
    ``response.content_type``.
    """
    custom = encode_headers(response.headers)
    headers: RawHeaders = []
    if not any(name == b"content-type" for name, _ in custom):
        headers.append((b"content-type", response.content_type.encode("latin-1")))
    headers.extend(custom)
    headers.append((b"content-length", str(len(body)).encode("latin-1")))
    return headers


async def send_response(response: Response, send: Send) -> None:
    """Send *response* as one ``http.response.start`` and one body message."""
    body = response.body_bytes if body_allowed(response.status) else b""
    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers(response, body),
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body,
        }
    )
