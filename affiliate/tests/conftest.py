"""Async test fixtures for affiliate tests using SQLite."""

from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from affiliate.cache import DedupSet, get_backfill_dedup_set, get_redis
from affiliate.config import settings
from affiliate.database import get_db, get_session_factory
from affiliate.models.base import Base
from affiliate.models.link import Link
from affiliate.models.partner import Partner
from affiliate.models.program import Program
from affiliate.models.workspace import Workspace
from affiliate.services.events_svc import get_event_client

API_TOKEN = "test-backfill-token"
OTHER_API_TOKEN = "test-other-token"


class FakeRedis:
    """The subset of redis.asyncio.Redis the app uses, kept in memory."""

    def __init__(self) -> None:
        self.sets: dict[str, set[str]] = {}
        self.pings = 0

    async def ping(self) -> bool:
        self.pings += 1
        return True

    async def smismember(self, key: str, members: list[str]) -> list[int]:
        existing = self.sets.get(key, set())
        return [1 if m in existing else 0 for m in members]

    async def sadd(self, key: str, *members: str) -> int:
        existing = self.sets.setdefault(key, set())
        added = len(set(members) - existing)
        existing.update(members)
        return added


class RecordingEventClient:
    """Stands in for EventIngestionClient and keeps every row it was given."""

    def __init__(self) -> None:
        self.clicks: list = []
        self.leads: list = []
        self.sales: list = []

    async def record_clicks(self, events):
        self.clicks.extend(events)
        return {"successful_rows": len(events), "quarantined_rows": 0}

    async def record_leads(self, events):
        self.leads.extend(events)
        return {"successful_rows": len(events), "quarantined_rows": 0}

    async def record_sales(self, events):
        self.sales.extend(events)
        return {"successful_rows": len(events), "quarantined_rows": 0}


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest_asyncio.fixture
async def engine():
    eng = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def dedup(fake_redis: FakeRedis) -> DedupSet:
    return DedupSet(fake_redis, settings.backfill_cache_key)


@pytest.fixture
def events() -> RecordingEventClient:
    return RecordingEventClient()


@pytest_asyncio.fixture
async def workspace(db: AsyncSession):
    ws = Workspace(
        id=settings.backfill_workspace_id,
        name="Framer",
        slug="framer",
        stripe_connect_id="acct_test",
    )
    db.add(ws)
    await db.commit()
    await db.refresh(ws)
    return ws


@pytest_asyncio.fixture
async def other_workspace(db: AsyncSession):
    ws = Workspace(id="ws_other", name="Other", slug="other")
    db.add(ws)
    await db.commit()
    await db.refresh(ws)
    return ws


@pytest_asyncio.fixture
async def program(db: AsyncSession, workspace: Workspace):
    prog = Program(id="prog_framer", workspace_id=workspace.id, name="Framer Partners", slug="framer")
    db.add(prog)
    await db.commit()
    await db.refresh(prog)
    return prog


@pytest_asyncio.fixture
async def partner(db: AsyncSession):
    pn = Partner(id="pn_alice", name="Alice", country="US")
    db.add(pn)
    await db.commit()
    await db.refresh(pn)
    return pn


async def _make_link(
    db: AsyncSession,
    workspace: Workspace,
    key: str,
    *,
    program: Program | None = None,
    partner: Partner | None = None,
    domain: str | None = None,
) -> Link:
    domain = domain or settings.backfill_domain
    link = Link(
        project_id=workspace.id,
        domain=domain,
        key=key,
        short_link=f"https://{domain}/{key}",
        url=f"https://www.framer.com/?via={key}",
        program_id=program.id if program else None,
        partner_id=partner.id if partner else None,
    )
    db.add(link)
    await db.commit()
    await db.refresh(link)
    return link


@pytest.fixture
def make_link(db: AsyncSession, workspace: Workspace):
    """Factory for links on the backfill domain."""

    async def factory(key: str, **kwargs) -> Link:
        return await _make_link(db, workspace, key, **kwargs)

    return factory


@pytest_asyncio.fixture
async def promo_link(db: AsyncSession, workspace: Workspace, program: Program, partner: Partner):
    return await _make_link(db, workspace, "promo1", program=program, partner=partner)


@pytest_asyncio.fixture
async def client(engine, session_factory, dedup, events, fake_redis, monkeypatch):
    """HTTPX async test client against the affiliate app."""
    from affiliate.app import app

    monkeypatch.setattr(
        settings,
        "workspace_access_tokens",
        f"{settings.backfill_workspace_id}:{API_TOKEN},ws_other:{OTHER_API_TOKEN}",
    )

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_backfill_dedup_set] = lambda: dedup
    app.dependency_overrides[get_redis] = lambda: fake_redis
    app.dependency_overrides[get_event_client] = lambda: events

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers={"Authorization": f"Bearer {API_TOKEN}"},
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def other_auth_headers() -> dict[str, str]:
    """Credentials of a workspace that exists but is not the backfill workspace."""
    return {"Authorization": f"Bearer {OTHER_API_TOKEN}"}
