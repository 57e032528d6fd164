"""Customer model - a converted visitor attributed to a link."""

from __future__ import annotations

from datetime import datetime
from functools import partial

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from ..utils.ids import create_id
from .base import Base, ProjectMixin


class Customer(ProjectMixin, Base):
    __tablename__ = "customer"
    __table_args__ = (
        UniqueConstraint("project_id", "external_id", name="uq_customer_project_external_id"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=partial(create_id, "cus_"))
    name: Mapped[str | None] = mapped_column(String(200), default=None)
    external_id: Mapped[str | None] = mapped_column(String(255), default=None)
    project_connect_id: Mapped[str | None] = mapped_column(String(100), default=None)
    click_id: Mapped[str | None] = mapped_column(String(32), default=None)
    link_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("link.id", ondelete="SET NULL"), default=None, index=True
    )
    clicked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=None)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"<Customer {self.external_id!r}>"
