"""User Repository: SQLAlchemy persistence for users with soft delete.

Invariants:
    - Every read filters out rows with deleted_at set
    - delete() stamps deleted_at and deactivates; the row is kept
    - Passwords arrive already hashed (services/passwords.py)
    - Soft-deleted rows still hold their email/username; uniqueness lookups
      pass include_deleted=True
    - A unique-constraint violation on write raises ConflictError (409), not
      DatabaseError
"""

from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.core.errors import EMAIL_TAKEN, USERNAME_TAKEN, ConflictError
from helpdesk.db.base import utcnow
from helpdesk.models.user import User
from helpdesk.repositories.base import apply_changes, fetch_page
from helpdesk.schemas.common import PageRequest

SORT_COLUMNS = {
    "createdAt": User.created_at,
    "updatedAt": User.updated_at,
    "username": User.username,
    "email": User.email,
}


def _live_users():
    return select(User).where(User.deleted_at.is_(None))


class SqlUserRepository:
    def __init__(self, db: AsyncSession):
        self._db = db

    async def find_all(
        self, filters: dict[str, Any], options: PageRequest,
    ) -> tuple[Sequence[User], int]:
        query = _live_users()
        if "role" in filters:
            query = query.where(User.role == filters["role"])
        if "is_active" in filters:
            query = query.where(User.is_active == filters["is_active"])
        return await fetch_page(self._db, query, options, SORT_COLUMNS, User.id)

    async def find_by_id(self, user_id: int) -> User | None:
        return await self._db.scalar(_live_users().where(User.id == user_id))

    async def find_by_email(
        self, email: str, include_deleted: bool = False,
    ) -> User | None:
        query = select(User) if include_deleted else _live_users()
        return await self._db.scalar(query.where(User.email == email))

    async def find_by_username(
        self, username: str, include_deleted: bool = False,
    ) -> User | None:
        query = select(User) if include_deleted else _live_users()
        return await self._db.scalar(query.where(User.username == username))

    async def create(self, data: dict[str, Any]) -> User:
        user = User(**data)
        self._db.add(user)
        await self._commit_unique()
        await self._db.refresh(user)
        return user

    async def _commit_unique(self) -> None:
        """Commit; a unique-constraint violation surfaces as ConflictError."""
        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            if "username" in str(e.orig).lower():
                raise ConflictError(USERNAME_TAKEN, "username") from e
            raise ConflictError(EMAIL_TAKEN, "email") from e

    async def update(self, user_id: int, data: dict[str, Any]) -> User | None:
        user = await self.find_by_id(user_id)
        if user is None:
            return None
        apply_changes(user, data)
        user.updated_at = utcnow()
        await self._commit_unique()
        await self._db.refresh(user)
        return user

    async def delete(self, user_id: int) -> bool:
        user = await self.find_by_id(user_id)
        if user is None:
            return False
        user.deleted_at = utcnow()
        user.is_active = False
        await self._db.commit()
        return True

    async def record_login(self, user_id: int) -> User | None:
        return await self.update(user_id, {"last_login_at": utcnow()})
