from __future__ import annotations

from datetime import datetime
from enum import Enum

import sqlalchemy as sa
from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ewm.models.base import Base, IntPrimaryKeyMixin, utcnow
from ewm.models.category import Category
from ewm.models.user import User


class EventState(str, Enum):
    PENDING = "PENDING"
    PUBLISHED = "PUBLISHED"
    CANCELED = "CANCELED"


class Event(Base, IntPrimaryKeyMixin):
    __tablename__ = "events"
    __table_args__ = (
        sa.CheckConstraint("participant_limit >= 0", name="ck_events_participant_limit_non_negative"),
        sa.CheckConstraint("confirmed_requests >= 0", name="ck_events_confirmed_requests_non_negative"),
        sa.Index("ix_events_state_event_date", "state", "event_date"),
    )

    title: Mapped[str] = mapped_column(String(120), nullable=False)
    annotation: Mapped[str] = mapped_column(String(2000), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    initiator_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    lat: Mapped[float] = mapped_column(Float, nullable=False)
    lon: Mapped[float] = mapped_column(Float, nullable=False)

    event_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    participant_limit: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    request_moderation: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Denormalized count of CONFIRMED participation requests.
    confirmed_requests: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    state: Mapped[EventState] = mapped_column(
        sa.Enum(EventState, name="event_state"),
        nullable=False,
        default=EventState.PENDING,
        index=True,
    )
    created_on: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    published_on: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    category: Mapped[Category] = relationship(lazy="joined", innerjoin=True)
    initiator: Mapped[User] = relationship(lazy="joined", innerjoin=True)

    @property
    def has_free_slots(self) -> bool:
        return self.participant_limit == 0 or self.confirmed_requests < self.participant_limit
