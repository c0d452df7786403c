from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from inventory_adjust.core.errors import StoreUnavailableError, TransactionRejectedError
from inventory_adjust.models.account import Account
from inventory_adjust.models.adjustment import InventoryAdjustment, InventoryAdjustmentLine
from inventory_adjust.models.department import Department
from inventory_adjust.models.item import Item
from inventory_adjust.models.location import Location
from inventory_adjust.models.reason_code import ReasonCode
from inventory_adjust.models.subsidiary import Subsidiary
from inventory_adjust.services.store import AdjustmentHeader, AdjustmentLine, EntityCategory, ReasonCodeMatch


logger = logging.getLogger(__name__)

CATEGORY_MODELS = {
    EntityCategory.DEPARTMENT: Department,
    EntityCategory.SUBSIDIARY: Subsidiary,
    EntityCategory.LOCATION: Location,
    EntityCategory.ITEM: Item,
}


class SqlEntityLookup:
    def __init__(self, db: Session) -> None:
        self.db = db

    def find_id_by_name(self, category: EntityCategory, name: str) -> str | None:
        category = EntityCategory(category)
        model = CATEGORY_MODELS[category]
        try:
            entity_id = self.db.scalar(
                select(model.id)
                .where(model.name == name)
                .where(model.is_inactive.is_(False))
                .order_by(model.id.asc())
                .limit(1)
            )
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"Lookup of {category.value} '{name}' failed: {exc}") from exc
        return str(entity_id) if entity_id is not None else None

    def find_reason_code(self, name: str) -> ReasonCodeMatch | None:
        try:
            row = self.db.execute(
                select(ReasonCode.id, ReasonCode.account_id)
                .where(ReasonCode.name == name)
                .where(ReasonCode.is_inactive.is_(False))
                .order_by(ReasonCode.id.asc())
                .limit(1)
            ).first()
        except SQLAlchemyError as exc:
            raise StoreUnavailableError(f"Lookup of reason code '{name}' failed: {exc}") from exc
        if row is None:
            return None
        account_id = str(row.account_id) if row.account_id is not None else None
        return ReasonCodeMatch(id=str(row.id), account_id=account_id)


class SqlTransactionWriter:
    def __init__(self, db: Session) -> None:
        self.db = db

    def create(self, header: AdjustmentHeader, lines: list[AdjustmentLine]) -> str:
        try:
            adjustment = self._build(header, lines)
            self.db.add(adjustment)
            self.db.commit()
        except TransactionRejectedError:
            self.db.rollback()
            raise
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise TransactionRejectedError(f"Inventory adjustment could not be saved: {exc}") from exc

        logger.debug("Created inventory adjustment %s with %s line(s)", adjustment.id, len(lines))
        return str(adjustment.id)

    def _build(self, header: AdjustmentHeader, lines: list[AdjustmentLine]) -> InventoryAdjustment:
        if not lines:
            raise TransactionRejectedError("Inventory adjustment requires at least one line")

        adjustment = InventoryAdjustment(
            subsidiary_id=self._reference(Subsidiary, "subsidiary", header.subsidiary_id),
            account_id=self._reference(Account, "account", header.account_id),
            reason_code_id=self._reference(ReasonCode, "reason code", header.reason_code_id, required=False),
            trandate=self._required("trandate", header.trandate),
            memo=header.memo,
        )
        for number, line in enumerate(lines, start=1):
            adjustment.lines.append(
                InventoryAdjustmentLine(
                    line=number,
                    item_id=self._reference(Item, "item", line.item_id),
                    location_id=self._reference(Location, "location", line.location_id),
                    department_id=self._reference(Department, "department", line.department_id, required=False),
                    adjust_qty_by=self._required("adjust_qty_by", line.adjust_qty_by),
                )
            )
        return adjustment

    def _reference(self, model, label: str, raw_id: str | None, required: bool = True) -> int | None:
        if raw_id in (None, ""):
            if required:
                raise TransactionRejectedError(f"Please enter value(s) for: {label}")
            return None
        try:
            entity_id = int(raw_id)
        except (TypeError, ValueError):
            raise TransactionRejectedError(f"Invalid {label} reference key {raw_id}") from None
        if self.db.get(model, entity_id) is None:
            raise TransactionRejectedError(f"Invalid {label} reference key {raw_id}")
        return entity_id

    @staticmethod
    def _required(label: str, value):
        if value is None:
            raise TransactionRejectedError(f"Please enter value(s) for: {label}")
        return value
