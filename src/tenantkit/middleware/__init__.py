"""Request-scoped pipeline helpers.

Each module handles one stage of the dispatcher: CORS, request ids,
authentication and input validation. All are stateless; configuration
is passed in.
"""

from tenantkit.middleware.auth import AuthInput, AuthService
from tenantkit.middleware.cors import CORSConfig
from tenantkit.middleware.validation import (
    FieldError,
    RequestInput,
    SchemaValidator,
    ValidationOutcome,
    Validator,
)

__all__ = [
    "AuthInput",
    "AuthService",
    "CORSConfig",
    "FieldError",
    "RequestInput",
    "SchemaValidator",
    "ValidationOutcome",
    "Validator",
]
