from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from inventory_adjust.db.base import Base


class Item(Base):
    __tablename__ = "items"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(160), index=True, nullable=False)
    is_inactive: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
