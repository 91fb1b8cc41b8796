"""Shared query helpers: counting, sorting and slicing one page of rows."""

from typing import Any, Sequence

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.core.domain_types import SortOrder
from helpdesk.schemas.common import PageRequest


async def fetch_page(
    db: AsyncSession,
    query: Select,
    options: PageRequest,
    sort_columns: dict[str, Any],
    tiebreaker: Any,
    default_sort: str = "createdAt",
) -> tuple[Sequence[Any], int]:
    """Run `query` for one page; returns (rows, total rows matching the query)."""
    total = await db.scalar(
        select(func.count()).select_from(query.order_by(None).subquery()),
    )
    column = sort_columns.get(options.sort_by, sort_columns[default_sort])
    if options.sort_order == SortOrder.ASC.value:
        ordering = (column.asc(), tiebreaker.asc())
    else:
        ordering = (column.desc(), tiebreaker.desc())
    rows = await db.scalars(
        query.order_by(*ordering).limit(options.limit).offset(options.offset),
    )
    return rows.all(), total or 0


def apply_changes(row: Any, data: dict[str, Any]) -> None:
    for key, value in data.items():
        setattr(row, key, value)
