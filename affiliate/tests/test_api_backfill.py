"""Test the lead backfill cron route."""

from __future__ import annotations

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from affiliate.config import settings
from affiliate.models.commission import Commission
from affiliate.models.customer import Customer
from affiliate.models.link import Link

URL = "/api/cron/framer/backfill-leads-batch"

SIGNUP = {
    "via": "promo1",
    "externalId": "u1",
    "eventName": "Signup",
    "creationDate": "2024-01-01",
}


async def _count(db: AsyncSession, model) -> int:
    return (await db.execute(select(func.count()).select_from(model))).scalar()


@pytest.mark.asyncio
async def test_backfill_single_record(client: AsyncClient, db: AsyncSession, promo_link: Link, events, fake_redis):
    resp = await client.post(URL, json=[SIGNUP])
    assert resp.status_code == 200
    assert resp.json() == [
        {
            "via": "promo1",
            "externalId": "u1",
            "eventName": "Signup",
            "creationDate": "2024-01-01T00:00:00.000Z",
        }
    ]

    customers = (await db.execute(select(Customer))).scalars().all()
    assert len(customers) == 1
    customer = customers[0]
    assert customer.external_id == "u1"
    assert customer.project_id == settings.backfill_workspace_id
    assert customer.link_id == promo_link.id
    assert customer.id.startswith("cus_")
    assert len(customer.click_id) == 16

    assert len(events.clicks) == 1
    assert events.clicks[0].click_id == customer.click_id
    assert events.clicks[0].timestamp == "2024-01-01T00:00:00.000Z"

    assert len(events.leads) == 1
    assert events.leads[0].event_name == "Signup"
    assert events.leads[0].customer_id == customer.id

    assert len(events.sales) == 1
    sale = events.sales[0]
    assert sale.event_name == "Invoice paid"
    assert sale.amount == 0
    assert sale.payment_processor == "custom"

    commissions = (await db.execute(select(Commission))).scalars().all()
    assert len(commissions) == 1
    assert commissions[0].status == "paid"
    assert commissions[0].amount == 0
    assert commissions[0].event_id == sale.event_id
    assert commissions[0].partner_id == promo_link.partner_id

    assert "u1:Signup" in fake_redis.sets[settings.backfill_cache_key]


@pytest.mark.asyncio
async def test_backfill_resubmission_is_noop(client: AsyncClient, db: AsyncSession, promo_link: Link, events):
    first = await client.post(URL, json=[SIGNUP])
    assert first.status_code == 200

    second = await client.post(URL, json=[SIGNUP])
    assert second.status_code == 200
    assert second.json()[0]["externalId"] == "u1"

    assert await _count(db, Customer) == 1
    assert await _count(db, Commission) == 1
    assert len(events.leads) == 1
    assert len(events.sales) == 1

    await db.refresh(promo_link)
    assert promo_link.clicks == 1


@pytest.mark.asyncio
async def test_backfill_missing_links_rejects_batch(
    client: AsyncClient, db: AsyncSession, promo_link: Link, events, fake_redis
):
    batch = [
        SIGNUP,
        {**SIGNUP, "via": "nope1", "externalId": "u2"},
        {**SIGNUP, "via": "nope2", "externalId": "u3"},
    ]
    resp = await client.post(URL, json=batch)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Links not found: nope1, nope2."}

    assert await _count(db, Customer) == 0
    assert await _count(db, Commission) == 0
    assert events.clicks == [] and events.leads == [] and events.sales == []
    assert fake_redis.sets == {}


@pytest.mark.asyncio
async def test_backfill_increments_link_counters(
    client: AsyncClient, db: AsyncSession, promo_link: Link, make_link, program, partner
):
    other = await make_link("promo2", program=program, partner=partner)
    batch = [
        {**SIGNUP, "externalId": "u1"},
        {**SIGNUP, "externalId": "u2"},
        {**SIGNUP, "externalId": "u3"},
        {**SIGNUP, "via": "promo2", "externalId": "u4"},
    ]
    resp = await client.post(URL, json=batch)
    assert resp.status_code == 200

    await db.refresh(promo_link)
    await db.refresh(other)
    assert (promo_link.clicks, promo_link.leads, promo_link.sales) == (3, 3, 3)
    assert (other.clicks, other.leads, other.sales) == (1, 1, 1)


@pytest.mark.asyncio
async def test_backfill_reuses_existing_customer(client: AsyncClient, db: AsyncSession, promo_link: Link, events):
    batch = [SIGNUP, {**SIGNUP, "eventName": "Activated"}]
    resp = await client.post(URL, json=batch)
    assert resp.status_code == 200

    assert await _count(db, Customer) == 1
    assert {e.event_name for e in events.leads} == {"Signup", "Activated"}
    assert len({e.customer_id for e in events.leads}) == 1
    assert await _count(db, Commission) == 2


@pytest.mark.asyncio
async def test_backfill_requires_backfill_workspace(
    client: AsyncClient, other_workspace, other_auth_headers, promo_link: Link
):
    resp = await client.post(URL, json=[SIGNUP], headers=other_auth_headers)
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_backfill_requires_api_key(client: AsyncClient, promo_link: Link):
    resp = await client.post(URL, json=[SIGNUP], headers={"Authorization": ""})
    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == "unauthorized"


@pytest.mark.asyncio
async def test_backfill_rejects_malformed_batch(client: AsyncClient, workspace):
    resp = await client.post(URL, json={"via": "promo1"})
    assert resp.status_code == 422

    resp = await client.post(URL, json=[{"via": "promo1", "externalId": "u1"}])
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_backfill_rejects_link_outside_program(
    client: AsyncClient, db: AsyncSession, promo_link: Link, make_link, events, fake_redis
):
    await make_link("nopartner")
    batch = [SIGNUP, {**SIGNUP, "via": "nopartner", "externalId": "u9"}]
    resp = await client.post(URL, json=batch)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Links not in a partner program: nopartner."}

    assert await _count(db, Customer) == 0
    assert await _count(db, Commission) == 0
    assert events.clicks == [] and events.leads == [] and events.sales == []
    assert fake_redis.sets == {}

    # Once the link joins a program the same batch goes through.
    link = (await db.execute(select(Link).where(Link.key == "nopartner"))).scalar_one()
    link.program_id = promo_link.program_id
    link.partner_id = promo_link.partner_id
    await db.commit()

    resp = await client.post(URL, json=batch)
    assert resp.status_code == 200
    assert isinstance(resp.json(), list)
    assert await _count(db, Commission) == 2
    assert fake_redis.sets[settings.backfill_cache_key] == {"u1:Signup", "u9:Signup"}
