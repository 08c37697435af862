from __future__ import annotations

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ewm.models.base import Base, IntPrimaryKeyMixin
from ewm.models.event import Event

compilation_events = Table(
    "compilation_events",
    Base.metadata,
    Column("compilation_id", Integer, ForeignKey("compilations.id", ondelete="CASCADE"), primary_key=True),
    Column("event_id", Integer, ForeignKey("events.id", ondelete="CASCADE"), primary_key=True),
)


class Compilation(Base, IntPrimaryKeyMixin):
    __tablename__ = "compilations"

    title: Mapped[str] = mapped_column(String(50), nullable=False)
    pinned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)

    events: Mapped[list[Event]] = relationship(
        secondary=compilation_events,
        lazy="selectin",
        order_by=Event.id,
    )
