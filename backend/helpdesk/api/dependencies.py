"""Request Dependencies: resource lookup, DB sessions, repositories and schema validation.

Invariants:
    - Every handle comes from app.state.resources (set by the lifespan)
    - ValidatedRequest short-circuits with ValidationFailedError (400) before the
      handler runs; on success the handler receives the normalized value only
    - A malformed JSON body is a validation failure on field `body`
"""

import json
import logging
from typing import Any, AsyncGenerator, Literal

from fastapi import Depends, Request
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.core.errors import ValidationFailedError
from helpdesk.core.validation import ROOT_FIELD, FieldError, validate
from helpdesk.infrastructure.resources import AppResources
from helpdesk.repositories.product_repository import SqlProductRepository
from helpdesk.repositories.ticket_repository import SqlTicketRepository
from helpdesk.repositories.user_repository import SqlUserRepository
from helpdesk.services.health_check import HealthAggregator
from helpdesk.services.user_accounts import UserAccounts

logger = logging.getLogger(__name__)


def get_resources(request: Request) -> AppResources:
    resources = getattr(request.app.state, "resources", None)
    if resources is None:
        raise RuntimeError("Application resources not initialized")
    return resources


async def get_db(
    resources: AppResources = Depends(get_resources),
) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    async with resources.database.session() as session:
        yield session


def get_ticket_repository(db: AsyncSession = Depends(get_db)) -> SqlTicketRepository:
    return SqlTicketRepository(db)


def get_product_repository(db: AsyncSession = Depends(get_db)) -> SqlProductRepository:
    return SqlProductRepository(db)


def get_user_repository(db: AsyncSession = Depends(get_db)) -> SqlUserRepository:
    return SqlUserRepository(db)


def get_user_accounts(
    users: SqlUserRepository = Depends(get_user_repository),
    resources: AppResources = Depends(get_resources),
) -> UserAccounts:
    return UserAccounts(users, bcrypt_rounds=resources.settings.bcrypt_rounds)


def get_health_aggregator(
    resources: AppResources = Depends(get_resources),
) -> HealthAggregator:
    settings = resources.settings
    return HealthAggregator(
        database=resources.database,
        cache=resources.cache,
        environment=settings.app_env,
        probe_timeout_seconds=settings.health_probe_timeout_seconds,
        memory_warning_percent=settings.health_memory_warning_percent,
    )


class ValidatedRequest:
    """Dependency: validate the body or query string against `schema`."""

    def __init__(
        self, schema: type[BaseModel], source: Literal["body", "query"] = "body",
    ):
        self.schema = schema
        self.source = source

    async def __call__(self, request: Request) -> dict[str, Any]:
        payload = await self._read_payload(request)
        result = validate(self.schema, payload)
        if not result.ok:
            logger.warning(
                f"Validation failed on {request.url.path}: {result.error_details()}",
                extra={"path": request.url.path, "error_code": "VALIDATION_ERROR"},
            )
            raise ValidationFailedError(result.error_details())
        return result.value

    async def _read_payload(self, request: Request) -> Any:
        if self.source == "query":
            return dict(request.query_params)
        raw = await request.body()
        if not raw.strip():
            return {}
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            raise ValidationFailedError(
                [FieldError(ROOT_FIELD, "Malformed JSON body").to_dict()],
            )
