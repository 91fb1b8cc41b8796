"""User Accounts: registration, profile changes and credential checks.

Invariants:
    - email and username stay unique across all rows, soft-deleted included
      (409 CONFLICT otherwise)
    - Plain passwords never reach the repository; they are hashed here
    - authenticate() gives the same UNAUTHORIZED error for unknown email, wrong
      password and inactive account
"""

import logging
from typing import Any

from helpdesk.core.errors import (
    EMAIL_TAKEN, USERNAME_TAKEN,
    ConflictError, ResourceNotFoundError, UnauthorizedError,
)
from helpdesk.core.repository_protocols import UserRepository
from helpdesk.services.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class UserAccounts:
    def __init__(self, users: UserRepository, bcrypt_rounds: int = 10):
        self._users = users
        self._rounds = bcrypt_rounds

    async def register(self, data: dict[str, Any]):
        await self._ensure_unique(data)
        data = {**data, "password": hash_password(data["password"], self._rounds)}
        user = await self._users.create(data)
        logger.info(f"User {user.id} registered", extra={"resource_id": user.id})
        return user

    async def change(self, user_id: int, data: dict[str, Any]):
        if await self._users.find_by_id(user_id) is None:
            raise ResourceNotFoundError("User", user_id)
        await self._ensure_unique(data, user_id)
        if "password" in data:
            data = {**data, "password": hash_password(data["password"], self._rounds)}
        return await self._users.update(user_id, data)

    async def authenticate(self, email: str, password: str):
        user = await self._users.find_by_email(email)
        if user is None or not user.is_active:
            raise UnauthorizedError(INVALID_CREDENTIALS)
        if not verify_password(password, user.password):
            logger.warning(
                f"Failed login for user {user.id}", extra={"resource_id": user.id},
            )
            raise UnauthorizedError(INVALID_CREDENTIALS)
        return await self._users.record_login(user.id)

    async def _ensure_unique(
        self, data: dict[str, Any], user_id: int | None = None,
    ) -> None:
        if "email" in data:
            existing = await self._users.find_by_email(
                data["email"], include_deleted=True,
            )
            if existing is not None and existing.id != user_id:
                raise ConflictError(EMAIL_TAKEN, "email")
        if "username" in data:
            existing = await self._users.find_by_username(
                data["username"], include_deleted=True,
            )
            if existing is not None and existing.id != user_id:
                raise ConflictError(USERNAME_TAKEN, "username")
