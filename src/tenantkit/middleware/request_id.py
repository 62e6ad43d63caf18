"""Request id resolution."""

import uuid

from tenantkit.http.headers import Headers

REQUEST_ID_HEADER = "X-Request-ID"


def generate_request_id() -> str:
    return str(uuid.uuid4())


def resolve_request_id(headers: Headers) -> str:
    """Return the caller's ``X-Request-ID`` when present, else a fresh UUID4.

    An empty header value counts as absent.
    """
    inbound = headers.get(REQUEST_ID_HEADER)
    if inbound:
        return inbound
    return generate_request_id()
