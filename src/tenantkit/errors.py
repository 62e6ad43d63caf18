"""tenantkit exception hierarchy.

Framework-level failures only. Business failures travel as values
(see ``tenantkit.domain.errors``) and never reach this hierarchy.
"""


class TenantkitError(Exception):
    """Base for all tenantkit-specific errors."""


class ConfigurationError(TenantkitError):
    """Raised when the route table or pipeline configuration is invalid.

    Surfaced while the ``Dispatcher`` is being constructed, never
    per request.
    """
