"""Cron route that backfills historical leads for the migrated workspace."""

from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..cache import DedupSet, get_backfill_dedup_set
from ..config import settings
from ..database import get_db, get_session_factory
from ..errors import AuthorizationError
from ..models.workspace import Workspace
from ..schemas.backfill import BackfillBatch
from ..services import backfill_svc
from ..services.events_svc import EventIngestionClient, get_event_client
from ..tenant.deps import get_current_workspace

router = APIRouter(prefix="/api/cron", tags=["cron"])


async def require_backfill_workspace(
    workspace: Workspace = Depends(get_current_workspace),
) -> Workspace:
    if workspace.id != settings.backfill_workspace_id:
        raise AuthorizationError("Unauthorized")
    return workspace


@router.post("/framer/backfill-leads-batch")
async def backfill_leads_batch(
    batch: BackfillBatch,
    background_tasks: BackgroundTasks,
    workspace: Workspace = Depends(require_backfill_workspace),
    db: AsyncSession = Depends(get_db),
    dedup: DedupSet = Depends(get_backfill_dedup_set),
    events: EventIngestionClient = Depends(get_event_client),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
):
    records = batch.root
    result = await backfill_svc.backfill_leads_batch(
        db,
        records,
        project_id=workspace.id,
        project_connect_id=workspace.stripe_connect_id,
        domain=settings.backfill_domain,
        dedup=dedup,
        events=events,
    )

    if result.missing_link_keys:
        return JSONResponse(
            {"message": f"Links not found: {', '.join(result.missing_link_keys)}."}
        )
    if result.unenrolled_link_keys:
        return JSONResponse(
            {"message": f"Links not in a partner program: {', '.join(result.unenrolled_link_keys)}."}
        )

    if result.processed:
        background_tasks.add_task(
            backfill_svc.update_link_stats_detached,
            session_factory,
            settings.backfill_domain,
            result.processed,
        )

    return [r.model_dump(mode="json", by_alias=True) for r in records]
