from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Protocol


class EntityCategory(str, Enum):
    DEPARTMENT = "department"
    SUBSIDIARY = "subsidiary"
    LOCATION = "location"
    ITEM = "item"


@dataclass(frozen=True)
class ReasonCodeMatch:
    id: str
    account_id: str | None


@dataclass(frozen=True)
class AdjustmentLine:
    item_id: str
    location_id: str
    adjust_qty_by: float
    department_id: str | None = None


@dataclass(frozen=True)
class AdjustmentHeader:
    subsidiary_id: str
    account_id: str
    trandate: date
    reason_code_id: str | None = None
    memo: str = ""


# Implementations match active records only; inactive ones never resolve by name.
class EntityLookup(Protocol):
    def find_id_by_name(self, category: EntityCategory, name: str) -> str | None:
        """Return the id of the first active entity named exactly ``name``, or None."""

    def find_reason_code(self, name: str) -> ReasonCodeMatch | None:
        """Return the reason code named exactly ``name`` with its account, or None."""


class TransactionWriter(Protocol):
    def create(self, header: AdjustmentHeader, lines: list[AdjustmentLine]) -> str:
        """Persist one inventory adjustment and return its id.

        Raises TransactionRejectedError when the store refuses the record; nothing
        is persisted in that case.
        """
