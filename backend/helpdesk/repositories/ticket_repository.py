"""Ticket Repository: SQLAlchemy persistence for tickets."""

from datetime import datetime, time, timedelta, timezone
from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.db.base import utcnow
from helpdesk.models.ticket import Ticket
from helpdesk.repositories.base import apply_changes, fetch_page
from helpdesk.schemas.common import PageRequest

SORT_COLUMNS = {
    "createdAt": Ticket.created_at,
    "updatedAt": Ticket.updated_at,
    "dueDate": Ticket.due_date,
    "priority": Ticket.priority,
    "status": Ticket.status,
    "title": Ticket.title,
}


def _start_of_day(day) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


class SqlTicketRepository:
    def __init__(self, db: AsyncSession):
        self._db = db

    async def find_all(
        self, filters: dict[str, Any], options: PageRequest,
    ) -> tuple[Sequence[Ticket], int]:
        query = select(Ticket)
        if "status" in filters:
            query = query.where(Ticket.status == filters["status"])
        if "priority" in filters:
            query = query.where(Ticket.priority == filters["priority"])
        if "assignee_id" in filters:
            query = query.where(Ticket.assignee_id == filters["assignee_id"])
        if "title" in filters:
            query = query.where(Ticket.title.ilike(f"%{filters['title']}%"))
        if "from_date" in filters:
            query = query.where(Ticket.created_at >= _start_of_day(filters["from_date"]))
        if "to_date" in filters:
            # inclusive of the whole toDate day
            end = _start_of_day(filters["to_date"]) + timedelta(days=1)
            query = query.where(Ticket.created_at < end)
        return await fetch_page(self._db, query, options, SORT_COLUMNS, Ticket.id)

    async def find_by_id(self, ticket_id: int) -> Ticket | None:
        return await self._db.get(Ticket, ticket_id)

    async def find_by_user_id(
        self, user_id: int, options: PageRequest,
    ) -> tuple[Sequence[Ticket], int]:
        query = select(Ticket).where(Ticket.assignee_id == user_id)
        return await fetch_page(self._db, query, options, SORT_COLUMNS, Ticket.id)

    async def create(self, data: dict[str, Any]) -> Ticket:
        ticket = Ticket(**data)
        self._db.add(ticket)
        await self._db.commit()
        await self._db.refresh(ticket)
        return ticket

    async def update(self, ticket_id: int, data: dict[str, Any]) -> Ticket | None:
        ticket = await self.find_by_id(ticket_id)
        if ticket is None:
            return None
        apply_changes(ticket, data)
        ticket.updated_at = utcnow()
        await self._db.commit()
        await self._db.refresh(ticket)
        return ticket

    async def delete(self, ticket_id: int) -> bool:
        ticket = await self.find_by_id(ticket_id)
        if ticket is None:
            return False
        await self._db.delete(ticket)
        await self._db.commit()
        return True

    async def assign_to_user(self, ticket_id: int, user_id: int) -> Ticket | None:
        return await self.update(ticket_id, {"assignee_id": user_id})
