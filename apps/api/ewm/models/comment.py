from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ewm.models.base import Base, IntPrimaryKeyMixin, utcnow
from ewm.models.user import User

comment_likes = Table(
    "comment_likes",
    Base.metadata,
    Column("comment_id", Integer, ForeignKey("comments.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Comment(Base, IntPrimaryKeyMixin):
    __tablename__ = "comments"

    event_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    author_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    text: Mapped[str] = mapped_column(String(2000), nullable=False)
    created: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    edited: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    author: Mapped[User] = relationship(lazy="joined", innerjoin=True)
    likers: Mapped[list[User]] = relationship(secondary=comment_likes, lazy="selectin")

    @property
    def likes(self) -> int:
        return len(self.likers)

    @property
    def author_name(self) -> str:
        return self.author.name
