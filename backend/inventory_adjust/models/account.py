from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from inventory_adjust.db.base import Base


class Account(Base):
    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    number: Mapped[str] = mapped_column(String(40), default="")
    name: Mapped[str] = mapped_column(String(160), index=True, nullable=False)
    is_inactive: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
