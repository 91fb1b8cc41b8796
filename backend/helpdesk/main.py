"""Helpdesk API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly under settings.api_prefix (no auto-discovery)
    - Global error handlers map every failure to an error envelope
    - CORS configured from settings (not hardcoded)
    - AppResources opened on startup and closed on shutdown via the lifespan
    - OpenAPI docs served only outside production
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from helpdesk.api.error_handlers import register_error_handlers
from helpdesk.api.routes import health, products, tickets, users
from helpdesk.config import get_settings
from helpdesk.infrastructure.observability import log_requests, setup_logging
from helpdesk.infrastructure.resources import AppResources

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.resources = AppResources.open(settings)
    logger.info(f"{settings.app_name} started ({settings.app_env})")
    yield
    logger.info(f"{settings.app_name} shutting down")
    await app.state.resources.close()


settings = get_settings()
docs_enabled = not settings.is_production

app = FastAPI(
    title=settings.app_name,
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/api-docs" if docs_enabled else None,
    redoc_url=None,
    openapi_url="/openapi.json" if docs_enabled else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(log_requests)

app.include_router(health.router, prefix=settings.api_prefix)
app.include_router(tickets.router, prefix=settings.api_prefix)
app.include_router(products.router, prefix=settings.api_prefix)
app.include_router(users.router, prefix=settings.api_prefix)

register_error_handlers(app)
