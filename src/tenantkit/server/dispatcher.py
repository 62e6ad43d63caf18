"""Request dispatcher — the ASGI application.

Runs each request through a fixed sequence of stages. Any stage may
produce the final response and stop the sequence:

1. CORS preflight (``OPTIONS`` answers ``ok`` and nothing else runs)
2. Request id (inbound ``X-Request-ID`` or a fresh UUID4)
3. Health check (``GET {base_path}/health``)
4. Route resolution (404 when nothing matches)
5. Authentication gate (401 when a required principal is missing)
6. Input validation (400 with every issue listed)
7. Handler
8. Response assembly (transformer for successful results, then headers
   checked for latin-1 encodability)

Stages 3-8 run inside a single ``try`` block; an exception escaping any
of them becomes a 500 that still carries the request id and CORS headers.

Usage::

    app = Dispatcher(build_handlers(use_cases), auth_service, PipelineConfig(base_path="/api"))
    # serve ``app`` with any ASGI server
"""

import logging
import time
from collections.abc import Sequence

from tenantkit._internal.asgi import Receive, Scope, Send
from tenantkit._internal.invoke import invoke
from tenantkit.config import PipelineConfig
from tenantkit.context import HandlerContext, HandlerResult, RequestContext
from tenantkit.http.error_mapper import utc_timestamp
from tenantkit.http.request import Request
from tenantkit.http.response import Response, json_response
from tenantkit.metrics import MetricsNotifier, RequestMetric
from tenantkit.middleware.auth import AuthService, authenticate_request, requires_authentication_call
from tenantkit.middleware.cors import build_cors_headers, is_preflight, preflight_response
from tenantkit.middleware.request_id import REQUEST_ID_HEADER, resolve_request_id
from tenantkit.middleware.validation import validate_request
from tenantkit.routing.route import AuthRequirement, HandlerPackage
from tenantkit.routing.router import Router
from tenantkit.server.errors import (
    authentication_required,
    error_response,
    internal_error_response,
    route_not_found,
    validation_failed,
)
from tenantkit.server.sender import encode_headers, send_response
from tenantkit.server.transform import TransformContext, apply_response_transformer

logger = logging.getLogger("tenantkit.server")


class Dispatcher:
    """ASGI application dispatching to handler packages.

    The route table, CORS headers and configuration are fixed at
    construction; each request gets its own ``RequestContext`` and
    shares nothing mutable with concurrent requests.
    """

    __slots__ = ("_auth_service", "_config", "_cors_headers", "_health_path", "_metrics", "_router")

    def __init__(
        self,
        packages: Sequence[HandlerPackage],
        auth_service: AuthService,
        config: PipelineConfig | None = None,
    ) -> None:
        self._config = config or PipelineConfig()
        self._router = Router(self._config.base_path, tuple(packages))
        self._auth_service = auth_service
        self._cors_headers = build_cors_headers(self._config.cors)
        self._health_path = f"{self._router.base_path}/health"
        self._metrics = MetricsNotifier(self._config.metrics)

    @property
    def config(self) -> PipelineConfig:
        return self._config

    @property
    def router(self) -> Router:
        return self._router

    @property
    def metrics(self) -> MetricsNotifier:
        return self._metrics

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        match scope["type"]:
            case "http":
                request = Request.from_asgi(scope, receive)
                response = await self.dispatch(request)
                await send_response(response, send)
            case "lifespan":
                await self._handle_lifespan(receive, send)
            case _:
                return

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Acknowledge startup and shutdown; wait for pending metrics on shutdown."""
        while True:
            message = await receive()
            match message["type"]:
                case "lifespan.startup":
                    await send({"type": "lifespan.startup.complete"})
                case "lifespan.shutdown":
                    await self._metrics.drain()
                    await send({"type": "lifespan.shutdown.complete"})
                    return

    # -- Pipeline --

    def _headers(self, request_id: str) -> dict[str, str]:
        return {REQUEST_ID_HEADER: request_id, **self._cors_headers}

    async def dispatch(self, request: Request) -> Response:
        """Run *request* through every stage and return the response.

        Never raises for ordinary failures; the caller always gets a
        response to send.
        """
        if is_preflight(request.method):
            return preflight_response(self._cors_headers, resolve_request_id(request.headers))

        context = RequestContext(request_id=resolve_request_id(request.headers))
        started = time.perf_counter()
        if self._config.debug:
            logger.info("%s %s [%s]", request.method, request.path, context.request_id)

        try:
            response = await self._run(request, context)
        except Exception as exc:
            response = internal_error_response(
                exc, context.request_id, self._headers(context.request_id)
            )

        duration_ms = (time.perf_counter() - started) * 1000
        if self._config.debug:
            logger.info(
                "%s %s -> %d (%.1fms) [%s]",
                request.method,
                request.path,
                response.status,
                duration_ms,
                context.request_id,
            )
        self._metrics.notify(
            RequestMetric(
                request_id=context.request_id,
                method=request.method,
                path=request.path,
                status=response.status,
                duration_ms=duration_ms,
                route=context.route.declaration.path if context.route is not None else None,
                principal_id=context.principal.external_id or None,
            )
        )
        return response

    async def _run(self, request: Request, context: RequestContext) -> Response:
        request_id = context.request_id
        headers = self._headers(request_id)

        if request.method.upper() == "GET" and request.path == self._health_path:
            return json_response(
                {"status": "healthy", "timestamp": utc_timestamp(), "requestId": request_id},
                headers=headers,
            )

        route_match = self._router.match(request.method, request.path)
        if route_match is None:
            return error_response(route_not_found(request.method, request.path, request_id), headers)
        context.route = route_match.route
        context.path_params = route_match.params
        package = route_match.package

        if requires_authentication_call(package.route.auth):
            context.principal = await authenticate_request(request, self._auth_service)
        if package.route.auth is AuthRequirement.REQUIRED and not context.principal.is_authenticated:
            return error_response(authentication_required(request_id), headers)

        outcome = await validate_request(request, context.path_params, package.schema)
        if not outcome.success:
            issues = [issue.to_dict() for issue in outcome.errors]
            return error_response(validation_failed(issues, request_id), headers)
        context.validated_input = outcome.data

        handler_context = HandlerContext(
            input=context.validated_input,
            principal=context.principal,
            request_id=request_id,
        )
        result = await invoke(package.handler, handler_context)
        if not isinstance(result, HandlerResult):
            msg = (
                f"Handler for {package.route.method} {package.route.path} returned "
                f"{type(result).__name__}, expected HandlerResult"
            )
            raise TypeError(msg)

        result = await apply_response_transformer(
            TransformContext(
                request=handler_context,
                response=result,
                route=package.route,
                use_case_result=result.use_case_result,
            ),
            self._config.response_transformer,
        )
        response = json_response(
            result.body, status=result.status, headers={**headers, **result.headers}
        )
        # Unencodable handler headers must fail here, inside the 500 boundary
        encode_headers(response.headers)
        return response
