"""Boundary Protocols: contracts between controllers and persistence / probes.

Invariants:
    - Controllers depend on these Protocols, never on a concrete repository class
    - find_all returns (items, total_items) so callers can build pagination
    - Filters and writes are normalized validation values keyed by attribute name

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO; the pure core never awaits them
"""

from typing import Any, Protocol, Sequence


class ListOptions(Protocol):
    """Pagination + sort options extracted from a filter schema."""
    page: int
    limit: int
    sort_by: str
    sort_order: str


class TicketRepository(Protocol):
    """Contract for ticket persistence."""
    async def find_all(
        self, filters: dict[str, Any], options: ListOptions,
    ) -> tuple[Sequence[Any], int]: ...
    async def find_by_id(self, ticket_id: int) -> Any | None: ...
    async def find_by_user_id(
        self, user_id: int, options: ListOptions,
    ) -> tuple[Sequence[Any], int]: ...
    async def create(self, data: dict[str, Any]) -> Any: ...
    async def update(self, ticket_id: int, data: dict[str, Any]) -> Any | None: ...
    async def delete(self, ticket_id: int) -> bool: ...
    async def assign_to_user(self, ticket_id: int, user_id: int) -> Any | None: ...


class ProductRepository(Protocol):
    """Contract for product persistence."""
    async def find_all(
        self, filters: dict[str, Any], options: ListOptions,
    ) -> tuple[Sequence[Any], int]: ...
    async def find_by_id(self, product_id: int) -> Any | None: ...
    async def create(self, data: dict[str, Any]) -> Any: ...
    async def update(self, product_id: int, data: dict[str, Any]) -> Any | None: ...
    async def delete(self, product_id: int) -> bool: ...


class UserRepository(Protocol):
    """Contract for user persistence.

    Soft-deleted users are never returned, except by the email and username
    lookups when include_deleted=True (uniqueness checks).
    """
    async def find_all(
        self, filters: dict[str, Any], options: ListOptions,
    ) -> tuple[Sequence[Any], int]: ...
    async def find_by_id(self, user_id: int) -> Any | None: ...
    async def find_by_email(
        self, email: str, include_deleted: bool = False,
    ) -> Any | None: ...
    async def find_by_username(
        self, username: str, include_deleted: bool = False,
    ) -> Any | None: ...
    async def create(self, data: dict[str, Any]) -> Any: ...
    async def update(self, user_id: int, data: dict[str, Any]) -> Any | None: ...
    async def delete(self, user_id: int) -> bool: ...
    async def record_login(self, user_id: int) -> Any | None: ...


class HealthProbe(Protocol):
    """A dependency that can be pinged; raises on failure."""
    async def ping(self) -> None: ...
