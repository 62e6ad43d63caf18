"""Response transformation hook.

Lets an application reshape successful handler results (rename fields,
add headers) without forking the handlers. Failures are never passed to
the hook, so a mapped domain error keeps its status and envelope. The
hook is fail-safe: if it raises or returns something that is not a
``HandlerResult`` with an integer status, the handler's own result is
sent instead.
"""

import logging
from dataclasses import dataclass
from typing import Any

from tenantkit._internal.invoke import invoke
from tenantkit.config import ResponseTransformer
from tenantkit.context import HandlerContext, HandlerResult
from tenantkit.routing.route import RouteDeclaration

logger = logging.getLogger("tenantkit.server")


@dataclass(frozen=True, slots=True)
class TransformContext:
    """What a response transformer receives.

    ``use_case_result`` is the ``Success`` a built-in handler rendered,
    or ``None`` for handlers that do not go through a use case.
    """

    request: HandlerContext
    response: HandlerResult
    route: RouteDeclaration
    use_case_result: Any = None


def _is_valid(result: object) -> bool:
    if not isinstance(result, HandlerResult):
        return False
    status = result.status
    return isinstance(status, int) and not isinstance(status, bool)


async def apply_response_transformer(
    context: TransformContext,
    transformer: ResponseTransformer | None,
) -> HandlerResult:
    """Run *transformer* over ``context.response``; fall back to it on any failure.

    Unsuccessful responses are returned untouched.
    """
    if transformer is None or not context.response.is_success:
        return context.response

    try:
        transformed = await invoke(transformer, context)
    except Exception:
        logger.warning(
            "Response transformer failed for %s %s [%s]; sending original response",
            context.route.method,
            context.route.path,
            context.request.request_id,
            exc_info=True,
        )
        return context.response

    if not _is_valid(transformed):
        logger.warning(
            "Response transformer returned %r without an integer status [%s]; "
            "sending original response",
            type(transformed).__name__,
            context.request.request_id,
        )
        return context.response
    return transformed
