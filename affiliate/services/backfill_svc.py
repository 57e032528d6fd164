"""Lead backfill - replays historical conversions as click/lead/sale events.

Records are skipped when their ``externalId:eventName`` key is already in the
dedup set. Every referenced link must exist and belong to a partner program;
otherwise the batch is rejected before anything is written. The event, commission and dedup-set writes are dispatched together
and are not atomic: when one of them fails the others still run, and the
error propagates to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Any, Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..cache import DedupSet
from ..models.commission import Commission
from ..models.customer import Customer
from ..models.link import Link
from ..schemas.backfill import BackfillRecord
from ..schemas.events import ClickEvent, LeadEvent, SaleEvent
from ..utils.dates import isoformat_z
from ..utils.ids import create_id, nanoid
from ..utils.links import link_constructor_simple
from ..utils.names import generate_random_name
from .bulk import insert_ignore_duplicates
from .events_svc import EventIngestionClient

logger = logging.getLogger(__name__)

SALE_EVENT_NAME = "Invoice paid"


@dataclass
class BackfillEvents:
    """Everything written for one backfilled record."""

    record: BackfillRecord
    click: ClickEvent
    lead: LeadEvent
    sale: SaleEvent
    commission: dict[str, Any]


@dataclass
class BackfillResult:
    processed: list[BackfillRecord] = field(default_factory=list)
    skipped: list[BackfillRecord] = field(default_factory=list)
    missing_link_keys: list[str] = field(default_factory=list)
    unenrolled_link_keys: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not (self.missing_link_keys or self.unenrolled_link_keys)


async def filter_unprocessed(
    dedup: DedupSet, records: Sequence[BackfillRecord]
) -> tuple[list[BackfillRecord], list[BackfillRecord]]:
    """Split records into (pending, already recorded)."""
    flags = await dedup.contains_many([r.dedup_key for r in records])
    pending = [r for r, seen in zip(records, flags) if not seen]
    skipped = [r for r, seen in zip(records, flags) if seen]
    return pending, skipped


async def find_links_by_keys(
    db: AsyncSession, domain: str, keys: Sequence[str]
) -> dict[str, Link]:
    """Map link key -> Link for the short links ``https://{domain}/{key}``."""
    if not keys:
        return {}
    short_links = {link_constructor_simple(domain, key) for key in keys}
    stmt = select(Link).where(Link.short_link.in_(short_links))
    result = await db.execute(stmt)
    return {link.key: link for link in result.scalars().all()}


async def upsert_customers(
    db: AsyncSession,
    project_id: str,
    records: Sequence[BackfillRecord],
    links: dict[str, Link],
    *,
    project_connect_id: str | None = None,
) -> dict[str, Customer]:
    """Create one customer per external id unless it exists, then re-read.

    The re-read returns the rows that actually won, which differ from the
    generated ones when another request created the same customer first.
    """
    rows: dict[str, dict[str, Any]] = {}
    for record in records:
        if record.external_id in rows:
            continue
        rows[record.external_id] = {
            "id": create_id("cus_"),
            "name": generate_random_name(),
            "external_id": record.external_id,
            "project_id": project_id,
            "project_connect_id": project_connect_id,
            "click_id": nanoid(16),
            "link_id": links[record.via].id,
            "clicked_at": record.creation_date,
            "created_at": record.creation_date,
        }

    await insert_ignore_duplicates(db, Customer, list(rows.values()))
    await db.commit()

    stmt = select(Customer).where(
        Customer.project_id == project_id,
        Customer.external_id.in_(list(rows)),
    )
    result = await db.execute(stmt)
    return {c.external_id: c for c in result.scalars().all()}


def build_backfill_events(record: BackfillRecord, link: Link, customer: Customer) -> BackfillEvents:
    """Derive the click, lead and sale events plus the commission for a record.

    No request context exists for historical conversions, so every
    environment field carries its "Unknown" placeholder.
    """
    if not (link.program_id and link.partner_id):
        raise ValueError(f"Link {link.short_link} is not part of a partner program")

    timestamp = isoformat_z(record.creation_date)
    click = ClickEvent(
        timestamp=timestamp,
        identity_hash=record.external_id,
        click_id=customer.click_id or nanoid(16),
        link_id=link.id,
        url=link.url,
        continent="NA",
    )
    context = click.model_dump()

    lead = LeadEvent(
        **context,
        event_id=nanoid(16),
        event_name=record.event_name,
        customer_id=customer.id,
    )

    sale = SaleEvent(
        **context,
        event_id=nanoid(16),
        event_name=SALE_EVENT_NAME,
        customer_id=customer.id,
        payment_processor="custom",
        amount=0,
        currency="usd",
    )

    commission = {
        "id": create_id("cm_"),
        "event_id": sale.event_id,
        "type": "sale",
        "program_id": link.program_id,
        "partner_id": link.partner_id,
        "link_id": link.id,
        "customer_id": customer.id,
        "amount": 0,
        "earnings": 0,
        "quantity": 1,
        "currency": "usd",
        "status": "paid",
        "created_at": record.creation_date,
    }

    return BackfillEvents(record=record, click=click, lead=lead, sale=sale, commission=commission)


async def record_commissions(db: AsyncSession, commissions: Sequence[dict[str, Any]]) -> None:
    await insert_ignore_duplicates(db, Commission, commissions)
    await db.commit()


async def backfill_leads_batch(
    db: AsyncSession,
    records: Sequence[BackfillRecord],
    *,
    project_id: str,
    domain: str,
    dedup: DedupSet,
    events: EventIngestionClient,
    project_connect_id: str | None = None,
) -> BackfillResult:
    """Replay ``records`` for the workspace ``project_id``.

    Nothing is written when any record references a link key that does not
    exist on ``domain``, or a link outside any partner program; the
    offending keys are returned instead.
    """
    pending, skipped = await filter_unprocessed(dedup, records)
    result = BackfillResult(skipped=skipped)
    if skipped:
        logger.info("Skipping %d already backfilled records", len(skipped))

    links = await find_links_by_keys(db, domain, [r.via for r in pending])
    missing = [r.via for r in pending if r.via not in links]
    if missing:
        logger.warning("Backfill aborted, links not found: %s", ", ".join(missing))
        result.missing_link_keys = missing
        return result

    unenrolled = list(dict.fromkeys(
        r.via for r in pending if not (links[r.via].program_id and links[r.via].partner_id)
    ))
    if unenrolled:
        logger.warning("Backfill aborted, links not in a partner program: %s", ", ".join(unenrolled))
        result.unenrolled_link_keys = unenrolled
        return result

    if not pending:
        return result

    customers = await upsert_customers(
        db, project_id, pending, links, project_connect_id=project_connect_id
    )

    built = [
        build_backfill_events(r, links[r.via], customers[r.external_id])
        for r in pending
    ]

    results = await asyncio.gather(
        events.record_clicks([b.click for b in built]),
        events.record_leads([b.lead for b in built]),
        record_commissions(db, [b.commission for b in built]),
        events.record_sales([b.sale for b in built]),
        dedup.add_many(b.record.dedup_key for b in built),
        return_exceptions=True,
    )
    errors = [r for r in results if isinstance(r, BaseException)]
    if errors:
        logger.error("%d of 5 backfill writes failed for workspace %s", len(errors), project_id)
        raise errors[0]

    logger.info("Backfilled %d records for workspace %s", len(built), project_id)
    result.processed = list(pending)
    return result


def group_link_keys_by_count(records: Sequence[BackfillRecord]) -> dict[int, list[str]]:
    """Group link keys by how many records reference them.

    Every key in a group gets the same counter increment, so each group needs
    a single UPDATE statement.
    """
    grouped: dict[int, list[str]] = defaultdict(list)
    for key, count in Counter(r.via for r in records).items():
        grouped[count].append(key)
    return dict(grouped)


async def update_link_stats(
    session_factory: async_sessionmaker[AsyncSession],
    domain: str,
    records: Sequence[BackfillRecord],
) -> None:
    """Increment clicks, leads and sales on every link referenced by ``records``."""
    grouped = group_link_keys_by_count(records)
    if not grouped:
        return

    async with session_factory() as db:
        for count, keys in grouped.items():
            stmt = (
                update(Link)
                .where(Link.short_link.in_([link_constructor_simple(domain, k) for k in keys]))
                .values(
                    clicks=Link.clicks + count,
                    leads=Link.leads + count,
                    sales=Link.sales + count,
                )
                .execution_options(synchronize_session=False)
            )
            await db.execute(stmt)
        await db.commit()


async def update_link_stats_detached(
    session_factory: async_sessionmaker[AsyncSession],
    domain: str,
    records: Sequence[BackfillRecord],
) -> None:
    """Run :func:`update_link_stats` after the response; failures are only logged."""
    try:
        await update_link_stats(session_factory, domain, records)
    except Exception:
        logger.exception("Link stats update failed for %d backfilled records", len(records))
