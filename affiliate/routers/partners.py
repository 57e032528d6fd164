"""Program partner routes."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..models.workspace import Workspace
from ..services import partner_svc
from ..tenant.deps import get_current_workspace

router = APIRouter(prefix="/api/programs", tags=["partners"])


@router.get("/{program_id}/partners/count")
async def count_partners(
    program_id: str,
    group_by: Literal["country", "status"] | None = Query(None, alias="groupBy"),
    workspace: Workspace = Depends(get_current_workspace),
    db: AsyncSession = Depends(get_db),
):
    await partner_svc.get_program_or_raise(db, workspace.id, program_id)

    if group_by == "country":
        return await partner_svc.count_partners_by_country(db, program_id)
    if group_by == "status":
        return await partner_svc.count_partners_by_status(db, program_id)
    return await partner_svc.count_partners(db, program_id)
