"""Base model classes and mixins."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    """Adds created_at / updated_at columns."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class ProjectMixin:
    """Adds project_id FK for multi-tenant isolation."""

    project_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("workspace.id", ondelete="CASCADE"),
        index=True,
    )
