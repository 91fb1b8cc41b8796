"""Ticket Routes: list/get/create/update/delete/assign.

Invariants:
    - Missing ticket -> 404 NOT_FOUND "Ticket with ID {id} not found"
    - A referenced assignee must be a live user (404 otherwise)
    - Bodies and query strings pass through ValidatedRequest before the handler runs
"""

import logging

from fastapi import APIRouter, Depends, status

from helpdesk.api.dependencies import (
    ValidatedRequest, get_ticket_repository, get_user_repository,
)
from helpdesk.core import envelope
from helpdesk.core.errors import ResourceNotFoundError
from helpdesk.core.repository_protocols import TicketRepository, UserRepository
from helpdesk.schemas.common import split_list_query
from helpdesk.schemas.ticket import (
    TicketAssign, TicketCreate, TicketFilter, TicketResponse, TicketUpdate,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/tickets", tags=["tickets"])


async def get_ticket_or_404(tickets: TicketRepository, ticket_id: int):
    ticket = await tickets.find_by_id(ticket_id)
    if ticket is None:
        raise ResourceNotFoundError("Ticket", ticket_id)
    return ticket


async def ensure_assignee_exists(users: UserRepository, assignee_id: int | None) -> None:
    if assignee_id is not None and await users.find_by_id(assignee_id) is None:
        raise ResourceNotFoundError("User", assignee_id)


@router.get("")
async def list_tickets(
    query: dict = Depends(ValidatedRequest(TicketFilter, "query")),
    tickets: TicketRepository = Depends(get_ticket_repository),
):
    """List tickets with filters and pagination."""
    filters, options = split_list_query(query)
    rows, total = await tickets.find_all(filters, options)
    return envelope.paginated(
        "Tickets retrieved successfully",
        TicketResponse.present_list(rows),
        envelope.page_of(options.page, options.limit, total),
    )


@router.get("/{ticket_id}")
async def get_ticket(
    ticket_id: int, tickets: TicketRepository = Depends(get_ticket_repository),
):
    ticket = await get_ticket_or_404(tickets, ticket_id)
    return envelope.success(
        "Ticket retrieved successfully", TicketResponse.present(ticket),
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_ticket(
    body: dict = Depends(ValidatedRequest(TicketCreate)),
    tickets: TicketRepository = Depends(get_ticket_repository),
    users: UserRepository = Depends(get_user_repository),
):
    await ensure_assignee_exists(users, body.get("assignee_id"))
    ticket = await tickets.create(body)
    logger.info(f"Ticket {ticket.id} created", extra={"resource_id": ticket.id})
    return envelope.success(
        "Ticket created successfully", TicketResponse.present(ticket),
    )


@router.put("/{ticket_id}")
async def update_ticket(
    ticket_id: int,
    body: dict = Depends(ValidatedRequest(TicketUpdate)),
    tickets: TicketRepository = Depends(get_ticket_repository),
    users: UserRepository = Depends(get_user_repository),
):
    await get_ticket_or_404(tickets, ticket_id)
    await ensure_assignee_exists(users, body.get("assignee_id"))
    ticket = await tickets.update(ticket_id, body)
    return envelope.success(
        "Ticket updated successfully", TicketResponse.present(ticket),
    )


@router.delete("/{ticket_id}")
async def delete_ticket(
    ticket_id: int, tickets: TicketRepository = Depends(get_ticket_repository),
):
    await get_ticket_or_404(tickets, ticket_id)
    await tickets.delete(ticket_id)
    logger.info(f"Ticket {ticket_id} deleted", extra={"resource_id": ticket_id})
    return envelope.success("Ticket deleted successfully")


@router.post("/{ticket_id}/assign")
async def assign_ticket(
    ticket_id: int,
    body: dict = Depends(ValidatedRequest(TicketAssign)),
    tickets: TicketRepository = Depends(get_ticket_repository),
    users: UserRepository = Depends(get_user_repository),
):
    await get_ticket_or_404(tickets, ticket_id)
    await ensure_assignee_exists(users, body["assignee_id"])
    ticket = await tickets.assign_to_user(ticket_id, body["assignee_id"])
    return envelope.success(
        "Ticket assigned successfully", TicketResponse.present(ticket),
    )
