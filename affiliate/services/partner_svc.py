"""Program and partner queries."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import NotFoundError
from ..models.partner import Partner
from ..models.program import Program, ProgramEnrollment, ProgramEnrollmentStatus


async def get_program_or_raise(db: AsyncSession, workspace_id: str, program_id: str) -> Program:
    """Return the program if it belongs to the workspace, else raise NotFoundError."""
    stmt = select(Program).where(Program.id == program_id, Program.workspace_id == workspace_id)
    program = (await db.execute(stmt)).scalar_one_or_none()
    if not program:
        raise NotFoundError("Program not found.")
    return program


async def count_partners_by_country(db: AsyncSession, program_id: str) -> list[dict]:
    """Enrolled partners per country, most common first."""
    count_col = func.count(Partner.id)
    stmt = (
        select(Partner.country, count_col)
        .join(ProgramEnrollment, ProgramEnrollment.partner_id == Partner.id)
        .where(ProgramEnrollment.program_id == program_id)
        .group_by(Partner.country)
        .order_by(count_col.desc())
    )
    result = await db.execute(stmt)
    return [{"country": country, "_count": count} for country, count in result.all()]


async def count_partners_by_status(db: AsyncSession, program_id: str) -> list[dict]:
    """Enrollments per status, including every status with no enrollments as 0."""
    stmt = (
        select(ProgramEnrollment.status, func.count())
        .where(ProgramEnrollment.program_id == program_id)
        .group_by(ProgramEnrollment.status)
    )
    result = await db.execute(stmt)
    counts = [
        {"status": ProgramEnrollmentStatus(status).value, "_count": count}
        for status, count in result.all()
    ]

    present = {c["status"] for c in counts}
    for status in ProgramEnrollmentStatus:
        if status.value not in present:
            counts.append({"status": status.value, "_count": 0})
    return counts


async def count_partners(db: AsyncSession, program_id: str) -> int:
    stmt = select(func.count()).select_from(ProgramEnrollment).where(
        ProgramEnrollment.program_id == program_id
    )
    return (await db.execute(stmt)).scalar() or 0
