from datetime import date

import pytest
from sqlalchemy import func, select

from inventory_adjust.core.errors import TransactionRejectedError
from inventory_adjust.models import Department, InventoryAdjustment, InventoryAdjustmentLine, Item, ReasonCode
from inventory_adjust.services.sql_store import SqlEntityLookup, SqlTransactionWriter
from inventory_adjust.services.store import AdjustmentHeader, AdjustmentLine, EntityCategory


def adjustment_count(db_session) -> int:
    return db_session.scalar(select(func.count()).select_from(InventoryAdjustment))


def test_find_id_by_name_exact_match(db_session, reference_data):
    lookup = SqlEntityLookup(db_session)

    assert lookup.find_id_by_name(EntityCategory.ITEM, "SKU-100") == str(reference_data["item"].id)
    assert lookup.find_id_by_name(EntityCategory.ITEM, "sku-100") is None
    assert lookup.find_id_by_name(EntityCategory.ITEM, " SKU-100") is None


def test_find_id_by_name_picks_single_match_for_duplicates(db_session, reference_data):
    db_session.add(Department(name="Warehouse"))
    db_session.commit()
    lookup = SqlEntityLookup(db_session)

    first = lookup.find_id_by_name(EntityCategory.DEPARTMENT, "Warehouse")
    second = lookup.find_id_by_name(EntityCategory.DEPARTMENT, "Warehouse")

    assert first is not None
    assert first == second


def test_find_id_by_name_skips_inactive(db_session, reference_data):
    db_session.add(Item(name="SKU-OLD", is_inactive=True))
    db_session.commit()

    assert SqlEntityLookup(db_session).find_id_by_name(EntityCategory.ITEM, "SKU-OLD") is None


def test_find_reason_code_returns_account(db_session, reference_data):
    match = SqlEntityLookup(db_session).find_reason_code("CYCLE_COUNT")

    assert match.id == str(reference_data["reason_code"].id)
    assert match.account_id == str(reference_data["account"].id)


def test_find_reason_code_without_account(db_session, reference_data):
    db_session.add(ReasonCode(name="UNMAPPED"))
    db_session.commit()

    match = SqlEntityLookup(db_session).find_reason_code("UNMAPPED")
    assert match is not None
    assert match.account_id is None


def test_find_reason_code_missing(db_session, reference_data):
    assert SqlEntityLookup(db_session).find_reason_code("NOPE") is None


def make_header(reference_data, **overrides) -> AdjustmentHeader:
    values = {
        "subsidiary_id": str(reference_data["subsidiary"].id),
        "account_id": str(reference_data["account"].id),
        "trandate": date(2024, 1, 15),
        "reason_code_id": str(reference_data["reason_code"].id),
    }
    values.update(overrides)
    return AdjustmentHeader(**values)


def make_line(reference_data, **overrides) -> AdjustmentLine:
    values = {
        "item_id": str(reference_data["item"].id),
        "location_id": str(reference_data["location"].id),
        "adjust_qty_by": 12,
        "department_id": str(reference_data["department"].id),
    }
    values.update(overrides)
    return AdjustmentLine(**values)


def test_writer_persists_header_and_line(db_session, reference_data):
    record_id = SqlTransactionWriter(db_session).create(
        make_header(reference_data),
        [make_line(reference_data, adjust_qty_by=-5)],
    )

    adjustment = db_session.get(InventoryAdjustment, int(record_id))
    assert adjustment.trandate == date(2024, 1, 15)
    assert adjustment.reason_code_id == reference_data["reason_code"].id
    assert len(adjustment.lines) == 1
    line = adjustment.lines[0]
    assert line.line == 1
    assert line.adjust_qty_by == -5
    assert line.item_id == reference_data["item"].id


def test_writer_rejects_missing_mandatory_field(db_session, reference_data):
    writer = SqlTransactionWriter(db_session)

    with pytest.raises(TransactionRejectedError, match="subsidiary"):
        writer.create(make_header(reference_data, subsidiary_id=""), [make_line(reference_data)])

    assert adjustment_count(db_session) == 0


def test_writer_rejects_unknown_reference_without_partial_save(db_session, reference_data):
    writer = SqlTransactionWriter(db_session)

    with pytest.raises(TransactionRejectedError, match="Invalid location reference key 9999"):
        writer.create(make_header(reference_data), [make_line(reference_data, location_id="9999")])

    assert adjustment_count(db_session) == 0
    assert db_session.scalar(select(func.count()).select_from(InventoryAdjustmentLine)) == 0


def test_writer_requires_a_line(db_session, reference_data):
    with pytest.raises(TransactionRejectedError):
        SqlTransactionWriter(db_session).create(make_header(reference_data), [])
