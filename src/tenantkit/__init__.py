"""tenantkit — ASGI dispatch pipeline for multi-tenant APIs.

Routes requests for users, organizations and memberships to injected
use cases, with CORS, request ids, authentication and validation
handled in one place::

    from tenantkit import Dispatcher, PipelineConfig, build_handlers

    app = Dispatcher(
        build_handlers(use_cases),
        auth_service,
        PipelineConfig(base_path="/api"),
    )
"""

from tenantkit.config import PipelineConfig
from tenantkit.context import HandlerContext, HandlerResult
from tenantkit.domain import (
    ANONYMOUS,
    BusinessRuleError,
    ConflictError,
    Failure,
    NotFoundError,
    Page,
    Principal,
    Success,
    UnauthorizedError,
    ValidationError,
)
from tenantkit.errors import ConfigurationError, TenantkitError
from tenantkit.handlers import UseCases, build_handlers
from tenantkit.metrics import HttpMetricsConfig, HttpMetricsSink
from tenantkit.middleware import AuthInput, CORSConfig, SchemaValidator
from tenantkit.routing import AuthRequirement, HandlerPackage, RouteDeclaration, Router
from tenantkit.server.dispatcher import Dispatcher

__version__ = "0.1.0"

__all__ = [
    "ANONYMOUS",
    "AuthInput",
    "AuthRequirement",
    "BusinessRuleError",
    "CORSConfig",
    "ConfigurationError",
    "ConflictError",
    "Dispatcher",
    "Failure",
    "HandlerContext",
    "HandlerPackage",
    "HandlerResult",
    "HttpMetricsConfig",
    "HttpMetricsSink",
    "NotFoundError",
    "Page",
    "PipelineConfig",
    "Principal",
    "RouteDeclaration",
    "Router",
    "SchemaValidator",
    "Success",
    "TenantkitError",
    "UnauthorizedError",
    "UseCases",
    "ValidationError",
    "__version__",
    "build_handlers",
]
