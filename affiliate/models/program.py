"""Partner program, enrollment and branding resource models."""

from __future__ import annotations

import enum
from datetime import datetime
from functools import partial

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..utils.ids import create_id
from .base import Base, TimestampMixin


class ProgramEnrollmentStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"
    invited = "invited"
    declined = "declined"
    banned = "banned"
    archived = "archived"


class ProgramResourceType(str, enum.Enum):
    logo = "logo"
    color = "color"
    file = "file"


class Program(TimestampMixin, Base):
    __tablename__ = "program"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=partial(create_id, "prog_"))
    workspace_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("workspace.id", ondelete="CASCADE"), index=True
    )
    name: Mapped[str] = mapped_column(String(200))
    slug: Mapped[str] = mapped_column(String(100), unique=True)

    workspace: Mapped["Workspace"] = relationship(back_populates="programs")  # noqa: F821
    enrollments: Mapped[list["ProgramEnrollment"]] = relationship(
        back_populates="program", cascade="all, delete-orphan"
    )
    resources: Mapped[list["ProgramResource"]] = relationship(
        back_populates="program", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Program {self.slug!r}>"


class ProgramEnrollment(Base):
    """A partner's membership in a program."""

    __tablename__ = "program_enrollment"
    __table_args__ = (
        UniqueConstraint("program_id", "partner_id", name="uq_program_enrollment_program_partner"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=partial(create_id, "pge_"))
    program_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("program.id", ondelete="CASCADE"), index=True
    )
    partner_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("partner.id", ondelete="CASCADE"), index=True
    )
    status: Mapped[ProgramEnrollmentStatus] = mapped_column(
        Enum(ProgramEnrollmentStatus, native_enum=False, length=20),
        default=ProgramEnrollmentStatus.pending,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    program: Mapped[Program] = relationship(back_populates="enrollments")
    partner: Mapped["Partner"] = relationship(back_populates="enrollments")  # noqa: F821


class ProgramResource(Base):
    """Branding asset (logo, color or file) offered to a program's partners."""

    __tablename__ = "program_resource"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=partial(create_id, "pgr_"))
    program_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("program.id", ondelete="CASCADE"), index=True
    )
    resource_type: Mapped[ProgramResourceType] = mapped_column(
        Enum(ProgramResourceType, native_enum=False, length=10)
    )
    name: Mapped[str | None] = mapped_column(String(200), default=None)
    url: Mapped[str | None] = mapped_column(String(2000), default=None)
    size: Mapped[int | None] = mapped_column(Integer, default=None)
    color: Mapped[str | None] = mapped_column(String(20), default=None)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    program: Mapped[Program] = relationship(back_populates="resources")
