"""Ticket Schemas: create/update/assign/filter contracts and the ticket transformer.

Invariants:
    - TicketCreate: title 3-100 and description >= 10 required; priority defaults
      to medium, status to open; dueDate must lie in the future
    - TicketUpdate: every field optional, same bounds as create, any dueDate
    - TicketFilter.toDate >= fromDate, checked only when both are present and valid
"""

from datetime import date, datetime, timezone
from typing import Literal

from pydantic import Field, ValidationInfo, field_validator

from helpdesk.core.domain_types import TicketPriority, TicketStatus
from helpdesk.schemas.common import (
    PaginationQuery, RequestSchema, ResponseSchema, as_utc,
)


class TicketCreate(RequestSchema):
    title: str = Field(min_length=3, max_length=100)
    description: str = Field(min_length=10)
    priority: TicketPriority = TicketPriority.MEDIUM
    status: TicketStatus = TicketStatus.OPEN
    due_date: datetime | None = None
    assignee_id: int | None = Field(None, gt=0)

    @field_validator("due_date")
    @classmethod
    def due_date_in_future(cls, v: datetime | None) -> datetime | None:
        if v is None:
            return v
        v = as_utc(v)
        if v <= datetime.now(timezone.utc):
            raise ValueError("dueDate must be in the future")
        return v


class TicketUpdate(RequestSchema):
    title: str | None = Field(None, min_length=3, max_length=100)
    description: str | None = Field(None, min_length=10)
    priority: TicketPriority | None = None
    status: TicketStatus | None = None
    due_date: datetime | None = None
    assignee_id: int | None = Field(None, gt=0)


class TicketAssign(RequestSchema):
    assignee_id: int = Field(gt=0)


class TicketPageQuery(PaginationQuery):
    """Pagination with the ticket sort keys; used where no filters apply."""
    sort_by: Literal[
        "createdAt", "updatedAt", "dueDate", "priority", "status", "title",
    ] = "createdAt"


class TicketFilter(TicketPageQuery):
    status: TicketStatus | None = None
    priority: TicketPriority | None = None
    assignee_id: int | None = Field(None, gt=0)
    title: str | None = None
    from_date: date | None = None
    to_date: date | None = None

    @field_validator("to_date")
    @classmethod
    def to_date_not_before_from_date(
        cls, v: date | None, info: ValidationInfo,
    ) -> date | None:
        from_date = info.data.get("from_date")
        if v is not None and from_date is not None and v < from_date:
            raise ValueError("toDate must be greater than or equal to fromDate")
        return v


class TicketResponse(ResponseSchema):
    id: int
    title: str
    description: str
    priority: str
    status: str
    due_date: datetime | None = None
    assignee_id: int | None = None
    created_by: int | None = None
    created_at: datetime
    updated_at: datetime
