"""User Repository: verifies unique-constraint violations surface as conflicts.

Invariants:
    - A duplicate email/username reaching the database raises ConflictError
      naming the offending field, never DatabaseError
    - The session stays usable after the conflict (rolled back)
    - Uniqueness lookups can see soft-deleted rows
"""

import pytest

from helpdesk.core.errors import ConflictError
from helpdesk.repositories.user_repository import SqlUserRepository


def _user(**overrides):
    data = {"username": "agent1", "email": "agent1@example.com", "password": "hashed"}
    data.update(overrides)
    return data


async def test_duplicate_email_on_insert_is_conflict(test_db):
    users = SqlUserRepository(test_db)
    await users.create(_user())

    with pytest.raises(ConflictError) as exc_info:
        await users.create(_user(username="agent2"))
    assert exc_info.value.field == "email"
    assert exc_info.value.http_status == 409


async def test_duplicate_username_on_insert_is_conflict(test_db):
    users = SqlUserRepository(test_db)
    await users.create(_user())

    with pytest.raises(ConflictError) as exc_info:
        await users.create(_user(email="other@example.com"))
    assert exc_info.value.field == "username"


async def test_session_usable_after_conflict(test_db):
    users = SqlUserRepository(test_db)
    await users.create(_user())
    with pytest.raises(ConflictError):
        await users.create(_user(username="agent2"))

    created = await users.create(_user(username="agent3", email="agent3@example.com"))
    assert created.id is not None


async def test_duplicate_on_update_is_conflict(test_db):
    users = SqlUserRepository(test_db)
    await users.create(_user())
    other = await users.create(_user(username="agent2", email="agent2@example.com"))

    with pytest.raises(ConflictError) as exc_info:
        await users.update(other.id, {"email": "agent1@example.com"})
    assert exc_info.value.field == "email"


async def test_lookups_see_deleted_rows_only_when_asked(test_db):
    users = SqlUserRepository(test_db)
    user = await users.create(_user())
    await users.delete(user.id)

    assert await users.find_by_email("agent1@example.com") is None
    assert await users.find_by_username("agent1") is None
    assert (await users.find_by_email("agent1@example.com", include_deleted=True)).id == user.id
    assert (await users.find_by_username("agent1", include_deleted=True)).id == user.id
