"""Request validation — body, path params and query checked together.

The dispatcher assembles a candidate ``{"body": ..., "params": ...,
"query": ...}`` and hands it to the route's validator. Issues from all
three parts are reported in one response, each with a dotted field path
(``body.email``, ``params.organizationId``, ``query.page``).

``SchemaValidator`` is the stock validator, built from pydantic models::

    SchemaValidator(body=TransferOwnershipBody, params=OrganizationParams)

Any object with a ``validate(candidate)`` method returning a
``ValidationOutcome`` (sync or async) can stand in for it.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import pydantic

from tenantkit._internal.invoke import invoke
from tenantkit.http.request import Request

logger = logging.getLogger("tenantkit.server")

REQUEST_PARTS: tuple[str, ...] = ("body", "params", "query")


@dataclass(frozen=True, slots=True)
class FieldError:
    """One validation issue."""

    field: str
    message: str
    code: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message, "code": self.code}


@dataclass(frozen=True, slots=True)
class ValidationOutcome:
    """Either validated data or the issues that prevented it."""

    success: bool
    data: Any = None
    errors: tuple[FieldError, ...] = ()

    @classmethod
    def ok(cls, data: Any) -> ValidationOutcome:
        return cls(success=True, data=data)

    @classmethod
    def failed(cls, errors: tuple[FieldError, ...]) -> ValidationOutcome:
        return cls(success=False, errors=errors)


@runtime_checkable
class Validator(Protocol):
    def validate(
        self, candidate: Mapping[str, Any]
    ) -> ValidationOutcome | Awaitable[ValidationOutcome]: ...


@dataclass(frozen=True, slots=True)
class RequestInput:
    """Validated request parts handed to the handler as ``ctx.input``.

    Parts without a model keep their raw value (a dict).
    """

    body: Any = None
    params: Any = None
    query: Any = None


def _field_path(part: str, loc: tuple[int | str, ...]) -> str:
    if not loc:
        return part
    return part + "." + ".".join(str(item) for item in loc)


class SchemaValidator:
    """Validator backed by one optional pydantic model per request part."""

    __slots__ = ("_models",)

    def __init__(
        self,
        *,
        body: type[pydantic.BaseModel] | None = None,
        params: type[pydantic.BaseModel] | None = None,
        query: type[pydantic.BaseModel] | None = None,
    ) -> None:
        self._models: dict[str, type[pydantic.BaseModel] | None] = {
            "body": body,
            "params": params,
            "query": query,
        }

    def validate(self, candidate: Mapping[str, Any]) -> ValidationOutcome:
        errors: list[FieldError] = []
        parts: dict[str, Any] = {}
        for part in REQUEST_PARTS:
            value = candidate.get(part, {})
            model = self._models[part]
            if model is None:
                parts[part] = value
                continue
            try:
                parts[part] = model.model_validate(value)
            except pydantic.ValidationError as exc:
                errors.extend(
                    FieldError(
                        field=_field_path(part, tuple(err["loc"])),
                        message=err["msg"],
                        code=err["type"],
                    )
                    for err in exc.errors(include_url=False)
                )
        if errors:
            return ValidationOutcome.failed(tuple(errors))
        return ValidationOutcome.ok(RequestInput(**parts))


async def parse_body(request: Request) -> Any:
    """Decoded JSON body, or ``{}`` when the body is not JSON.

    A missing JSON content type, an empty body and malformed JSON all
    yield ``{}``; the schema then reports whichever fields are missing.
    """
    if not request.is_json:
        return {}
    try:
        return await request.json()
    except ValueError as exc:
        logger.debug("Ignoring unparseable JSON body on %s %s: %s", request.method, request.path, exc)
        return {}


async def validate_request(
    request: Request,
    params: Mapping[str, str],
    validator: Validator | None,
) -> ValidationOutcome:
    """Assemble the candidate for *request* and run *validator* over it.

    Without a validator the raw parts pass through as a ``RequestInput``.
    Query parameters are flattened; a repeated key keeps its last value.
    """
    body = await parse_body(request)
    query = request.query.flatten()
    if validator is None:
        return ValidationOutcome.ok(RequestInput(body=body, params=dict(params), query=query))
    candidate = {"body": body, "params": dict(params), "query": query}
    return await invoke(validator.validate, candidate)
