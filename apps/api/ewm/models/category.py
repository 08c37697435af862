from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from ewm.models.base import Base, IntPrimaryKeyMixin


class Category(Base, IntPrimaryKeyMixin):
    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
