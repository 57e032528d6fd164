"""Program branding resources."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.program import ProgramResource, ProgramResourceType
from ..schemas.resources import ProgramColor, ProgramFile, ProgramLogo, ProgramResources


async def list_resources(db: AsyncSession, program_id: str) -> ProgramResources:
    stmt = (
        select(ProgramResource)
        .where(ProgramResource.program_id == program_id)
        .order_by(ProgramResource.created_at)
    )
    result = await db.execute(stmt)

    resources = ProgramResources()
    for res in result.scalars().all():
        if res.resource_type == ProgramResourceType.logo:
            resources.logos.append(ProgramLogo.model_validate(res))
        elif res.resource_type == ProgramResourceType.color:
            resources.colors.append(ProgramColor.model_validate(res))
        else:
            resources.files.append(ProgramFile.model_validate(res))
    return resources


async def delete_resource(
    db: AsyncSession,
    program_id: str,
    resource_type: ProgramResourceType,
    resource_id: str,
) -> bool:
    """Delete a resource. Returns True if found and deleted."""
    stmt = select(ProgramResource).where(
        ProgramResource.id == resource_id,
        ProgramResource.program_id == program_id,
        ProgramResource.resource_type == resource_type,
    )
    resource = (await db.execute(stmt)).scalar_one_or_none()
    if not resource:
        return False
    await db.delete(resource)
    await db.commit()
    return True
