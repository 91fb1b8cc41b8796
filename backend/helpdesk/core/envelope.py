"""Response Envelopes: uniform outer shape for every API response body.

Invariants:
    - Success envelopes carry `data` and never `code`
    - Error envelopes carry `code` (+ optional `details`) and never `data`
    - Every envelope carries `status`, `message` and an ISO-8601 UTC `timestamp`
    - Paginated envelopes satisfy totalPages == ceil(totalItems / limit) when built via page_of()

Design Decisions:
    - Pagination is a record of optional fields merged over defaults field by field,
      never a spread of a sparse dict
    - Builders return plain dicts: FastAPI serializes them without response_model plumbing
"""

import math
from dataclasses import dataclass, fields
from datetime import datetime, timezone
from typing import Any

from helpdesk.core.domain_types import ErrorCode, ResponseStatus

DEFAULT_SUCCESS_MESSAGE = "Operation successful"
DEFAULT_ERROR_MESSAGE = "An error occurred"
DEFAULT_PAGINATED_MESSAGE = "Data retrieved successfully"


@dataclass(frozen=True)
class Pagination:
    """Pagination block; None means "use the default"."""
    page: int | None = None
    limit: int | None = None
    total_items: int | None = None
    total_pages: int | None = None

    def to_dict(self) -> dict:
        return {
            "page": self.page,
            "limit": self.limit,
            "totalItems": self.total_items,
            "totalPages": self.total_pages,
        }


PAGINATION_DEFAULTS = Pagination(page=1, limit=10, total_items=0, total_pages=0)


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def merge_pagination(
    overrides: Pagination | None, defaults: Pagination = PAGINATION_DEFAULTS,
) -> Pagination:
    """Overlay every non-None field of `overrides` onto `defaults`."""
    if overrides is None:
        return defaults
    merged = {}
    for f in fields(Pagination):
        value = getattr(overrides, f.name)
        merged[f.name] = value if value is not None else getattr(defaults, f.name)
    return Pagination(**merged)


def page_of(page: int, limit: int, total_items: int) -> Pagination:
    """Pagination for one page of a result set of `total_items` rows."""
    total_pages = math.ceil(total_items / limit) if limit > 0 else 0
    return Pagination(
        page=page, limit=limit, total_items=total_items, total_pages=total_pages,
    )


def success(
    message: str | None = None, data: Any = None, meta: dict | None = None,
) -> dict:
    return {
        "status": ResponseStatus.SUCCESS.value,
        "message": message or DEFAULT_SUCCESS_MESSAGE,
        "data": data,
        "meta": meta if meta is not None else {},
        "timestamp": utc_timestamp(),
    }


def error(
    code: ErrorCode | str, message: str | None = None, details: Any = None,
) -> dict:
    body = {
        "status": ResponseStatus.ERROR.value,
        "code": code.value if isinstance(code, ErrorCode) else code,
        "message": message or DEFAULT_ERROR_MESSAGE,
        "timestamp": utc_timestamp(),
    }
    if details is not None:
        body["details"] = details
    return body


def paginated(
    message: str | None = None,
    data: list | None = None,
    pagination: Pagination | None = None,
    meta: dict | None = None,
) -> dict:
    body = success(
        message or DEFAULT_PAGINATED_MESSAGE,
        data if data is not None else [],
        meta,
    )
    body["pagination"] = merge_pagination(pagination).to_dict()
    return body
