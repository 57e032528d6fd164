"""Liveness and readiness probes."""

from __future__ import annotations

import logging

import redis.asyncio as redis
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..cache import get_redis
from ..database import get_db

logger = logging.getLogger(__name__)

SERVICE = "affiliate"

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    return {"status": "healthy", "service": SERVICE}


@router.get("/ready")
async def readiness_check(
    db: AsyncSession = Depends(get_db),
    cache: redis.Redis = Depends(get_redis),
):
    """Ready when both the database and the dedup cache answer."""
    checks = {"database": "ok", "cache": "ok"}
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Readiness: database check failed")
        checks["database"] = "unavailable"
    try:
        await cache.ping()
    except (redis.RedisError, OSError):
        logger.exception("Readiness: cache check failed")
        checks["cache"] = "unavailable"

    if all(v == "ok" for v in checks.values()):
        return {"status": "ready", "service": SERVICE, "checks": checks}
    return JSONResponse(
        status_code=503,
        content={"status": "unavailable", "service": SERVICE, "checks": checks},
    )
