"""FastAPI application factory for the affiliate platform API."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from .cache import close_redis
from .config import settings
from .errors import register_exception_handlers
from .log_config import configure_logging
from .services.events_svc import close_event_client


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    # Auto-create tables for SQLite (local dev); PostgreSQL uses Alembic migrations
    if "sqlite" in settings.database_url:
        from .database import engine
        from .models import Base
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    yield
    await close_event_client()
    await close_redis()


app = FastAPI(title=settings.app_title, lifespan=lifespan)
register_exception_handlers(app)

# Import and register routers
from .routers import backfill, health, metatags, partners, resources  # noqa: E402

app.include_router(backfill.router)
app.include_router(partners.router)
app.include_router(resources.router)
app.include_router(metatags.router)
app.include_router(health.router)
