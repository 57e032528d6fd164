"""Liveness and readiness probe tests."""

from __future__ import annotations

import pytest
import redis.asyncio as redis
from httpx import AsyncClient

from affiliate.app import app
from affiliate.cache import get_redis


@pytest.mark.asyncio
async def test_health_does_not_touch_backends(client: AsyncClient, fake_redis):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy", "service": "affiliate"}
    assert fake_redis.pings == 0


@pytest.mark.asyncio
async def test_ready_checks_database_and_cache(client: AsyncClient, fake_redis):
    resp = await client.get("/ready")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ready"
    assert body["checks"] == {"database": "ok", "cache": "ok"}
    assert fake_redis.pings == 1


@pytest.mark.asyncio
async def test_ready_reports_unreachable_cache(client: AsyncClient):
    class DownRedis:
        async def ping(self):
            raise redis.ConnectionError("Connection refused")

    app.dependency_overrides[get_redis] = lambda: DownRedis()
    resp = await client.get("/ready")
    assert resp.status_code == 503
    body = resp.json()
    assert body["status"] == "unavailable"
    assert body["checks"] == {"database": "ok", "cache": "unavailable"}
