"""Partner model."""

from __future__ import annotations

from functools import partial

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..utils.ids import create_id
from .base import Base, TimestampMixin


class Partner(TimestampMixin, Base):
    __tablename__ = "partner"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=partial(create_id, "pn_"))
    name: Mapped[str] = mapped_column(String(200))
    email: Mapped[str | None] = mapped_column(String(255), default=None, index=True)
    country: Mapped[str | None] = mapped_column(String(2), default=None)

    enrollments: Mapped[list["ProgramEnrollment"]] = relationship(  # noqa: F821
        back_populates="partner", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Partner {self.name!r}>"
