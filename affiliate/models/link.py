"""Short link model."""

from __future__ import annotations

from functools import partial

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ..utils.ids import create_id
from .base import Base, ProjectMixin, TimestampMixin


class Link(TimestampMixin, ProjectMixin, Base):
    __tablename__ = "link"
    __table_args__ = (
        Index("ix_link_domain_key", "domain", "key", unique=True),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=partial(create_id, "link_"))
    domain: Mapped[str] = mapped_column(String(190))
    key: Mapped[str] = mapped_column(String(190))
    short_link: Mapped[str] = mapped_column(String(400), unique=True)
    url: Mapped[str] = mapped_column(String(2000))
    program_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("program.id", ondelete="SET NULL"), default=None, index=True
    )
    partner_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("partner.id", ondelete="SET NULL"), default=None, index=True
    )

    clicks: Mapped[int] = mapped_column(Integer, default=0)
    leads: Mapped[int] = mapped_column(Integer, default=0)
    sales: Mapped[int] = mapped_column(Integer, default=0)

    def __repr__(self) -> str:
        return f"<Link {self.short_link!r}>"
