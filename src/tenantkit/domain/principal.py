"""Principal and the anonymous sentinel.

The pipeline never carries ``None`` for identity: "authentication was
not attempted" and "authentication produced nothing" are both
``ANONYMOUS``.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Principal:
    """An authenticated identity, keyed by the auth provider's id."""

    external_id: str

    @property
    def is_authenticated(self) -> bool:
        return bool(self.external_id)


@dataclass(frozen=True, slots=True)
class AnonymousPrincipal:
    """Sentinel for unauthenticated requests.

    Mirrors ``Principal``'s shape so handlers can read ``external_id``
    without null checks.
    """

    external_id: str = ""

    @property
    def is_authenticated(self) -> bool:
        return False


type AnyPrincipal = Principal | AnonymousPrincipal

ANONYMOUS: AnonymousPrincipal = AnonymousPrincipal()


def resolve_principal(candidate: object) -> AnyPrincipal:
    """Collapse an auth capability's return value onto a principal.

    ``None``, the sentinel, and principals with an empty id all become
    ``ANONYMOUS``.
    """
    if isinstance(candidate, Principal) and candidate.is_authenticated:
        return candidate
    return ANONYMOUS
