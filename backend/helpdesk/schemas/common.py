"""Schema Bases: request/response model configuration and shared pagination query.

Invariants:
    - RequestSchema ignores unknown fields and validates defaults
    - Enum fields normalize to their plain string values
    - ResponseSchema reads ORM attributes and dumps camelCase JSON-safe dicts
    - PaginationQuery: page >= 1 (default 1), 1 <= limit <= 100 (default 10),
      sortOrder asc|desc (default desc)
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from helpdesk.core.domain_types import SortOrder

PAGINATION_FIELDS = ("page", "limit", "sort_by", "sort_order")


class RequestSchema(BaseModel):
    """Base for every inbound schema (body or query string)."""

    model_config = ConfigDict(
        extra="ignore",
        alias_generator=to_camel,
        use_enum_values=True,
        validate_default=True,
        frozen=True,
    )


class ResponseSchema(BaseModel):
    """Base for every outbound transformer."""

    model_config = ConfigDict(
        populate_by_name=True,
        alias_generator=to_camel,
        from_attributes=True,
    )

    @classmethod
    def present(cls, obj: Any) -> dict:
        return cls.model_validate(obj).model_dump(mode="json", by_alias=True)

    @classmethod
    def present_list(cls, objs) -> list[dict]:
        return [cls.present(o) for o in objs]


class PaginationQuery(RequestSchema):
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1, le=100)
    sort_order: SortOrder = SortOrder.DESC


@dataclass(frozen=True)
class PageRequest:
    """Pagination + sort options handed to repositories."""
    page: int = 1
    limit: int = 10
    sort_by: str = "createdAt"
    sort_order: str = SortOrder.DESC.value

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def split_list_query(value: dict[str, Any]) -> tuple[dict[str, Any], PageRequest]:
    """Separate filter criteria from pagination options of a normalized filter value."""
    filters = {k: v for k, v in value.items() if k not in PAGINATION_FIELDS}
    options = PageRequest(**{k: value[k] for k in PAGINATION_FIELDS if k in value})
    return filters, options


def as_utc(moment: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment
