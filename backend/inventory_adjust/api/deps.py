from collections.abc import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from inventory_adjust.core.config import Settings, get_settings
from inventory_adjust.db.session import get_db
from inventory_adjust.services.netsuite import NetSuiteClient, NetSuiteEntityLookup, NetSuiteTransactionWriter
from inventory_adjust.services.sql_store import SqlEntityLookup, SqlTransactionWriter
from inventory_adjust.services.store import EntityLookup, TransactionWriter


def get_netsuite_client(settings: Settings = Depends(get_settings)) -> Generator[NetSuiteClient | None, None, None]:
    if settings.store_backend != "netsuite":
        yield None
        return
    client = NetSuiteClient(settings)
    try:
        yield client
    finally:
        client.close()


def get_entity_lookup(
    db: Session = Depends(get_db),
    client: NetSuiteClient | None = Depends(get_netsuite_client),
    settings: Settings = Depends(get_settings),
) -> EntityLookup:
    if client is not None:
        return NetSuiteEntityLookup(client, settings)
    return SqlEntityLookup(db)


def get_transaction_writer(
    db: Session = Depends(get_db),
    client: NetSuiteClient | None = Depends(get_netsuite_client),
    settings: Settings = Depends(get_settings),
) -> TransactionWriter:
    if client is not None:
        return NetSuiteTransactionWriter(client, settings)
    return SqlTransactionWriter(db)
