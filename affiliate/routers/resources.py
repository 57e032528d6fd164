"""Program branding resource routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..errors import NotFoundError
from ..models.program import ProgramResourceType
from ..models.workspace import Workspace
from ..schemas.resources import ProgramResources
from ..services import partner_svc, resource_svc
from ..tenant.deps import get_current_workspace

router = APIRouter(prefix="/api/programs", tags=["resources"])


@router.get("/{program_id}/resources", response_model=ProgramResources)
async def list_resources(
    program_id: str,
    workspace: Workspace = Depends(get_current_workspace),
    db: AsyncSession = Depends(get_db),
):
    await partner_svc.get_program_or_raise(db, workspace.id, program_id)
    return await resource_svc.list_resources(db, program_id)


@router.delete("/{program_id}/resources/{resource_type}/{resource_id}")
async def delete_resource(
    program_id: str,
    resource_type: ProgramResourceType,
    resource_id: str,
    workspace: Workspace = Depends(get_current_workspace),
    db: AsyncSession = Depends(get_db),
):
    await partner_svc.get_program_or_raise(db, workspace.id, program_id)
    deleted = await resource_svc.delete_resource(db, program_id, resource_type, resource_id)
    if not deleted:
        raise NotFoundError(f"{resource_type.value.capitalize()} not found.")
    return {"success": True}
