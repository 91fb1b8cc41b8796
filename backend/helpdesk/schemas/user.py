"""User Schemas: create/update/login/filter contracts and the user transformer.

Invariants:
    - username is alphanumeric, 3-30 chars; email is a valid address
    - password is 8-72 chars (bcrypt input limit)
    - UserResponse never exposes password or deleted_at
"""

from datetime import datetime
from typing import Literal

from pydantic import EmailStr, Field

from helpdesk.core.domain_types import UserRole
from helpdesk.schemas.common import PaginationQuery, RequestSchema, ResponseSchema

USERNAME_PATTERN = r"^[A-Za-z0-9]+$"


class UserCreate(RequestSchema):
    username: str = Field(min_length=3, max_length=30, pattern=USERNAME_PATTERN)
    email: EmailStr
    password: str = Field(min_length=8, max_length=72)
    full_name: str | None = Field(None, max_length=100)
    role: UserRole = UserRole.USER


class UserUpdate(RequestSchema):
    username: str | None = Field(
        None, min_length=3, max_length=30, pattern=USERNAME_PATTERN,
    )
    email: EmailStr | None = None
    password: str | None = Field(None, min_length=8, max_length=72)
    full_name: str | None = Field(None, max_length=100)
    role: UserRole | None = None
    is_active: bool | None = None


class UserLogin(RequestSchema):
    email: EmailStr
    password: str = Field(min_length=1)


class UserFilter(PaginationQuery):
    sort_by: Literal["createdAt", "updatedAt", "username", "email"] = "createdAt"
    role: UserRole | None = None
    is_active: bool | None = None


class UserResponse(ResponseSchema):
    id: int
    username: str
    email: str
    full_name: str | None = None
    role: str
    is_active: bool
    last_login_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
