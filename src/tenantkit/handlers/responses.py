"""Success envelopes.

Every successful body is ``{"data": ..., "meta": {...}}``; errors use the
``{"error": {...}}`` envelope from ``tenantkit.http.error_mapper``.
"""

import dataclasses
import math
from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel

from tenantkit.http.error_mapper import utc_timestamp

API_VERSION = "1.0"


def to_jsonable(value: Any) -> Any:
    """Convert use-case output into JSON-ready data.

    Pydantic models dump by alias (camelCase); dataclasses become dicts;
    lists and tuples convert element-wise. Anything else is returned as-is
    and left to the JSON encoder.
    """
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value


def meta(request_id: str) -> dict[str, Any]:
    return {"requestId": request_id, "timestamp": utc_timestamp(), "version": API_VERSION}


def success(data: Any, request_id: str) -> dict[str, Any]:
    return {"data": to_jsonable(data), "meta": meta(request_id)}


def paginated(
    items: Iterable[Any],
    request_id: str,
    *,
    total: int,
    page: int,
    per_page: int,
) -> dict[str, Any]:
    """Envelope for one page of a listing.

    ``totalPages`` rounds up; ``hasMore`` is true while ``page`` is
    before the last page.
    """
    total_pages = math.ceil(total / per_page) if per_page > 0 else 0
    body = meta(request_id)
    body["pagination"] = {
        "total": total,
        "page": page,
        "perPage": per_page,
        "totalPages": total_pages,
        "hasMore": page < total_pages,
    }
    return {"data": [to_jsonable(item) for item in items], "meta": body}
