"""Shared glue between an HTTP request and a use case.

Every built-in handler does the same four things: build the audit
context, shape the use-case input from the validated request, call
``execute``, and render the ``Result``. ``use_case_handler`` captures
that so each endpoint only declares what differs.
"""

from collections.abc import Callable, Mapping
from typing import Any

from tenantkit._internal.invoke import invoke
from tenantkit.context import Handler, HandlerContext, HandlerResult
from tenantkit.domain.result import Failure, Page, Success
from tenantkit.handlers.audit import build_operation_context
from tenantkit.handlers.responses import paginated, success
from tenantkit.handlers.use_cases import UseCase
from tenantkit.http.error_mapper import to_http_error
from tenantkit.middleware.request_id import REQUEST_ID_HEADER

type InputBuilder = Callable[[HandlerContext], Mapping[str, Any]]
type OrganizationIdGetter = Callable[[HandlerContext], str]
type LocationBuilder = Callable[[Any], str]


def field_of(value: Any, *names: str) -> Any:
    """First of *names* found on *value* as a key or attribute."""
    for name in names:
        if isinstance(value, Mapping):
            if name in value:
                return value[name]
        elif hasattr(value, name):
            return getattr(value, name)
    msg = f"{type(value).__name__} has none of {', '.join(names)}"
    raise LookupError(msg)


def organization_param(ctx: HandlerContext) -> str:
    """``organizationId`` path parameter as a string."""
    return str(ctx.input.params.organization_id)


def render_result(
    result: Any,
    request_id: str,
    *,
    status: int = 200,
    location: LocationBuilder | None = None,
) -> HandlerResult:
    """Turn a use-case ``Result`` into the HTTP result.

    Failures go through the error mapper. A ``Page`` renders with the
    paginated envelope. A 204 status drops the body.
    """
    headers = {REQUEST_ID_HEADER: request_id}
    match result:
        case Failure(error=error):
            http_error = to_http_error(error, request_id)
            return HandlerResult(
                status=http_error.status,
                body=http_error.body,
                headers=headers,
                use_case_result=result,
            )
        case Success(value=Page() as page):
            body = paginated(
                page.items,
                request_id,
                total=page.total,
                page=page.page,
                per_page=page.page_size,
            )
            return HandlerResult(status=status, body=body, headers=headers, use_case_result=result)
        case Success(value=value):
            if location is not None:
                headers["Location"] = location(value)
            body = None if status == 204 else success(value, request_id)
            return HandlerResult(status=status, body=body, headers=headers, use_case_result=result)
        case _:
            msg = f"Use case returned {type(result).__name__}, expected Success or Failure"
            raise TypeError(msg)


def use_case_handler(
    use_case: UseCase,
    *,
    action: str,
    build_input: InputBuilder,
    status: int = 200,
    organization_id: OrganizationIdGetter | None = None,
    location: LocationBuilder | None = None,
) -> Handler:
    """Build a handler that runs *use_case* and renders its result.

    *action* is the audit action recorded in the operation context
    (``CREATE_USER``, ``LEAVE_ORGANIZATION``, ...).
    """

    async def handle(ctx: HandlerContext) -> HandlerResult:
        operation = build_operation_context(
            ctx.request_id,
            ctx.principal,
            action,
            organization_id(ctx) if organization_id is not None else None,
        )
        result = await invoke(use_case.execute, build_input(ctx), operation)
        return render_result(result, ctx.request_id, status=status, location=location)

    handle.__name__ = action.lower()
    handle.__qualname__ = action.lower()
    return handle
