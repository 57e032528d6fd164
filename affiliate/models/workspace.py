"""Workspace model - the tenant root."""

from __future__ import annotations

from functools import partial

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..utils.ids import create_id
from .base import Base, TimestampMixin


class Workspace(TimestampMixin, Base):
    __tablename__ = "workspace"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=partial(create_id, "ws_"))
    name: Mapped[str] = mapped_column(String(200))
    slug: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    stripe_connect_id: Mapped[str | None] = mapped_column(String(100), default=None)

    programs: Mapped[list["Program"]] = relationship(  # noqa: F821
        back_populates="workspace", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Workspace {self.slug!r}>"
