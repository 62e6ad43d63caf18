"""Pipeline error responses.

Every failure the dispatcher itself produces (unknown route, missing
credentials, invalid input, uncaught exception) goes through here so the
envelope and headers stay identical across them.
"""

import logging
from collections.abc import Mapping
from typing import Any

from tenantkit.http.error_mapper import HttpError, error_body, from_exception
from tenantkit.http.response import Response, json_response

logger = logging.getLogger("tenantkit.server")

NOT_FOUND = "NOT_FOUND"
UNAUTHORIZED = "UNAUTHORIZED"
VALIDATION_ERROR = "VALIDATION_ERROR"


def error_response(http_error: HttpError, headers: Mapping[str, str]) -> Response:
    return json_response(http_error.body, status=http_error.status, headers=headers)


def route_not_found(method: str, path: str, request_id: str) -> HttpError:
    return HttpError(404, error_body(NOT_FOUND, f"Route {method} {path} not found", request_id))


def authentication_required(request_id: str) -> HttpError:
    return HttpError(401, error_body(UNAUTHORIZED, "Authentication required", request_id))


def validation_failed(issues: list[dict[str, Any]], request_id: str) -> HttpError:
    return HttpError(
        400,
        error_body(VALIDATION_ERROR, "Request validation failed", request_id, {"issues": issues}),
    )


def internal_error_response(
    exc: Exception,
    request_id: str,
    headers: Mapping[str, str],
) -> Response:
    """Log *exc* with its traceback and render the 500 envelope."""
    logger.exception("Unhandled error while processing request [%s]", request_id)
    return error_response(from_exception(exc, request_id), headers)
