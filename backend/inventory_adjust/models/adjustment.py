from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inventory_adjust.db.base import Base


class InventoryAdjustment(Base):
    __tablename__ = "inventory_adjustments"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    subsidiary_id: Mapped[int] = mapped_column(ForeignKey("subsidiaries.id"), nullable=False)
    reason_code_id: Mapped[int | None] = mapped_column(ForeignKey("reason_codes.id"), nullable=True)
    account_id: Mapped[int] = mapped_column(ForeignKey("accounts.id"), nullable=False)
    trandate: Mapped[date] = mapped_column(Date, nullable=False)
    memo: Mapped[str] = mapped_column(String(255), default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    lines: Mapped[list["InventoryAdjustmentLine"]] = relationship(
        back_populates="adjustment",
        cascade="all, delete-orphan",
        order_by="InventoryAdjustmentLine.line",
    )


class InventoryAdjustmentLine(Base):
    __tablename__ = "inventory_adjustment_lines"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    adjustment_id: Mapped[int] = mapped_column(ForeignKey("inventory_adjustments.id"), nullable=False, index=True)
    line: Mapped[int] = mapped_column(Integer, nullable=False)
    item_id: Mapped[int] = mapped_column(ForeignKey("items.id"), nullable=False)
    location_id: Mapped[int] = mapped_column(ForeignKey("locations.id"), nullable=False)
    department_id: Mapped[int | None] = mapped_column(ForeignKey("departments.id"), nullable=True)
    adjust_qty_by: Mapped[float] = mapped_column(Float, nullable=False)

    adjustment: Mapped[InventoryAdjustment] = relationship(back_populates="lines")
