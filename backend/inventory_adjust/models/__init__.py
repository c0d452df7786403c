from inventory_adjust.models.account import Account
from inventory_adjust.models.adjustment import InventoryAdjustment, InventoryAdjustmentLine
from inventory_adjust.models.department import Department
from inventory_adjust.models.item import Item
from inventory_adjust.models.location import Location
from inventory_adjust.models.reason_code import ReasonCode
from inventory_adjust.models.subsidiary import Subsidiary

__all__ = [
    "Account",
    "Department",
    "InventoryAdjustment",
    "InventoryAdjustmentLine",
    "Item",
    "Location",
    "ReasonCode",
    "Subsidiary",
]
