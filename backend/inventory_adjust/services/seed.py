from sqlalchemy.orm import Session

from inventory_adjust.models.account import Account
from inventory_adjust.models.department import Department
from inventory_adjust.models.item import Item
from inventory_adjust.models.location import Location
from inventory_adjust.models.reason_code import ReasonCode
from inventory_adjust.models.subsidiary import Subsidiary


DEMO_ACCOUNTS = {
    "5100": "Inventory Shrinkage",
    "5110": "Inventory Count Variance",
    "5120": "Damaged Goods Expense",
}

DEMO_REASON_CODES = {
    "CYCLE_COUNT": ("5110", "Variance found during a cycle count"),
    "DAMAGED": ("5120", "Stock written off as damaged"),
    "SHRINKAGE": ("5100", "Unexplained loss"),
}


def seed_demo_data(db: Session) -> None:
    if db.query(Account).count() == 0:
        db.add_all([Account(number=number, name=name) for number, name in DEMO_ACCOUNTS.items()])
        db.commit()

    if db.query(ReasonCode).count() == 0:
        accounts = {account.number: account for account in db.query(Account).all()}
        for name, (account_number, description) in DEMO_REASON_CODES.items():
            account = accounts.get(account_number)
            db.add(
                ReasonCode(
                    name=name,
                    account_id=account.id if account else None,
                    description=description,
                )
            )
        db.commit()

    defaults = [
        (Subsidiary, ["Main"]),
        (Department, ["Warehouse", "Production"]),
        (Location, ["Dock-A", "Dock-B"]),
        (Item, ["SKU-100", "SKU-200"]),
    ]
    for model, names in defaults:
        if db.query(model).count() == 0:
            db.add_all([model(name=name) for name in names])
    db.commit()
