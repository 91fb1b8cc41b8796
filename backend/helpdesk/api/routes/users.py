"""User Routes: list/get/create/update/delete, login, and a user's assigned tickets.

Invariants:
    - Responses go through UserResponse, so the password hash never leaves the server
    - DELETE is a soft delete; the user disappears from every endpoint afterwards
    - Failed login -> 401 UNAUTHORIZED without revealing which credential was wrong
"""

from fastapi import APIRouter, Depends, status

from helpdesk.api.dependencies import (
    ValidatedRequest, get_ticket_repository, get_user_accounts, get_user_repository,
)
from helpdesk.core import envelope
from helpdesk.core.errors import ResourceNotFoundError
from helpdesk.core.repository_protocols import TicketRepository, UserRepository
from helpdesk.schemas.common import split_list_query
from helpdesk.schemas.ticket import TicketPageQuery, TicketResponse
from helpdesk.schemas.user import (
    UserCreate, UserFilter, UserLogin, UserResponse, UserUpdate,
)
from helpdesk.services.user_accounts import UserAccounts

router = APIRouter(prefix="/users", tags=["users"])


async def get_user_or_404(users: UserRepository, user_id: int):
    user = await users.find_by_id(user_id)
    if user is None:
        raise ResourceNotFoundError("User", user_id)
    return user


@router.get("")
async def list_users(
    query: dict = Depends(ValidatedRequest(UserFilter, "query")),
    users: UserRepository = Depends(get_user_repository),
):
    filters, options = split_list_query(query)
    rows, total = await users.find_all(filters, options)
    return envelope.paginated(
        "Users retrieved successfully",
        UserResponse.present_list(rows),
        envelope.page_of(options.page, options.limit, total),
    )


@router.post("/login")
async def login(
    body: dict = Depends(ValidatedRequest(UserLogin)),
    accounts: UserAccounts = Depends(get_user_accounts),
):
    user = await accounts.authenticate(body["email"], body["password"])
    return envelope.success("Login successful", UserResponse.present(user))


@router.get("/{user_id}")
async def get_user(
    user_id: int, users: UserRepository = Depends(get_user_repository),
):
    user = await get_user_or_404(users, user_id)
    return envelope.success("User retrieved successfully", UserResponse.present(user))


@router.get("/{user_id}/tickets")
async def list_user_tickets(
    user_id: int,
    query: dict = Depends(ValidatedRequest(TicketPageQuery, "query")),
    users: UserRepository = Depends(get_user_repository),
    tickets: TicketRepository = Depends(get_ticket_repository),
):
    """Tickets assigned to one user, newest first by default."""
    await get_user_or_404(users, user_id)
    _, options = split_list_query(query)
    rows, total = await tickets.find_by_user_id(user_id, options)
    return envelope.paginated(
        "Tickets retrieved successfully",
        TicketResponse.present_list(rows),
        envelope.page_of(options.page, options.limit, total),
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    body: dict = Depends(ValidatedRequest(UserCreate)),
    accounts: UserAccounts = Depends(get_user_accounts),
):
    user = await accounts.register(body)
    return envelope.success("User created successfully", UserResponse.present(user))


@router.put("/{user_id}")
async def update_user(
    user_id: int,
    body: dict = Depends(ValidatedRequest(UserUpdate)),
    accounts: UserAccounts = Depends(get_user_accounts),
):
    user = await accounts.change(user_id, body)
    return envelope.success("User updated successfully", UserResponse.present(user))


@router.delete("/{user_id}")
async def delete_user(
    user_id: int, users: UserRepository = Depends(get_user_repository),
):
    await get_user_or_404(users, user_id)
    await users.delete(user_id)
    return envelope.success("User deleted successfully")
