"""Commission model."""

from __future__ import annotations

from datetime import datetime
from functools import partial

from sqlalchemy import DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from ..utils.ids import create_id
from .base import Base


class Commission(Base):
    """Payable amount owed to a partner for a single sale event."""

    __tablename__ = "commission"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=partial(create_id, "cm_"))
    event_id: Mapped[str | None] = mapped_column(String(32), unique=True, default=None)
    type: Mapped[str] = mapped_column(String(20), default="sale")
    program_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("program.id", ondelete="CASCADE"), index=True
    )
    partner_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("partner.id", ondelete="CASCADE"), index=True
    )
    link_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("link.id", ondelete="SET NULL"), default=None
    )
    customer_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("customer.id", ondelete="SET NULL"), default=None
    )
    # Amounts are in cents
    amount: Mapped[int] = mapped_column(Integer, default=0)
    earnings: Mapped[int] = mapped_column(Integer, default=0)
    quantity: Mapped[int] = mapped_column(Integer, default=1)
    currency: Mapped[str] = mapped_column(String(3), default="usd")
    status: Mapped[str] = mapped_column(String(20), default="pending")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<Commission {self.id!r} {self.status}>"
