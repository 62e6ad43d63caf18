"""Use-case results as values.

Use cases return ``Success`` or ``Failure`` instead of raising::

    result = await use_case.execute(data, context)
    match result:
        case Success(value):
            ...
        case Failure(error):
            ...
"""

from dataclasses import dataclass

from tenantkit.domain.errors import DomainError


@dataclass(frozen=True, slots=True)
class Success[T]:
    """A completed use case carrying its output."""

    value: T

    @property
    def is_success(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Failure:
    """A use case that ended in a domain error."""

    error: DomainError

    @property
    def is_success(self) -> bool:
        return False


type Result[T] = Success[T] | Failure


@dataclass(frozen=True, slots=True)
class Page[T]:
    """One page of a listing plus the figures needed to page through it."""

    items: tuple[T, ...] | list[T]
    total: int
    page: int
    page_size: int
