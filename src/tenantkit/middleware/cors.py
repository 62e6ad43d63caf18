"""CORS headers and the preflight short-circuit.

The header set is computed once from ``CORSConfig`` when the dispatcher
is built and attached to every response, error responses included.
"""

from dataclasses import dataclass

from tenantkit.http.response import Response
from tenantkit.middleware.request_id import REQUEST_ID_HEADER

DEFAULT_ALLOW_HEADERS: tuple[str, ...] = (
    "authorization",
    "x-client-info",
    "apikey",
    "content-type",
    "x-request-id",
)

DEFAULT_ALLOW_METHODS: tuple[str, ...] = ("GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS")

PREFLIGHT_BODY = "ok"


@dataclass(frozen=True, slots=True)
class CORSConfig:
    """CORS configuration.

    Defaults allow any origin with the headers and methods browser
    clients of the API send. Override what you need::

        CORSConfig(
            allow_origin=("https://app.example.com", "https://admin.example.com"),
            max_age=600,
        )
    """

    allow_origin: str | tuple[str, ...] = "*"
    allow_headers: tuple[str, ...] = DEFAULT_ALLOW_HEADERS
    allow_methods: tuple[str, ...] = DEFAULT_ALLOW_METHODS
    max_age: int | None = None


def build_cors_headers(config: CORSConfig) -> dict[str, str]:
    """Render *config* as response headers.

    A tuple of origins is joined with ``", "``. ``Access-Control-Max-Age``
    is only present when ``max_age`` is set.
    """
    origin = config.allow_origin
    if not isinstance(origin, str):
        origin = ", ".join(origin)

    headers = {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Headers": ", ".join(config.allow_headers),
        "Access-Control-Allow-Methods": ", ".join(config.allow_methods),
    }
    if config.max_age is not None:
        headers["Access-Control-Max-Age"] = str(config.max_age)
    return headers


def is_preflight(method: str) -> bool:
    return method.upper() == "OPTIONS"


def preflight_response(cors_headers: dict[str, str], request_id: str) -> Response:
    """200 ``ok`` with the CORS headers; nothing else in the pipeline runs."""
    return (
        Response(body=PREFLIGHT_BODY, status=200, content_type="text/plain")
        .with_headers(cors_headers)
        .with_header(REQUEST_ID_HEADER, request_id)
    )
