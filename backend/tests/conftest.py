import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import inventory_adjust.models  # noqa: F401
from inventory_adjust.core.config import Settings, get_settings
from inventory_adjust.db.base import Base
from inventory_adjust.db.session import get_db
from inventory_adjust.main import app
from inventory_adjust.models import Account, Department, Item, Location, ReasonCode, Subsidiary


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def reference_data(db_session):
    """Reference records for the cycle-count scenario, keyed by name."""
    account = Account(number="5110", name="Inventory Count Variance")
    db_session.add(account)
    db_session.flush()

    records = {
        "account": account,
        "reason_code": ReasonCode(name="CYCLE_COUNT", account_id=account.id),
        "department": Department(name="Warehouse"),
        "subsidiary": Subsidiary(name="Main"),
        "location": Location(name="Dock-A"),
        "item": Item(name="SKU-100"),
    }
    db_session.add_all(list(records.values())[1:])
    db_session.commit()
    return records


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: Settings(store_backend="database")
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def cycle_count_payload():
    return {
        "reasonCode": "CYCLE_COUNT",
        "department": "Warehouse",
        "subsidiary": "Main",
        "trandate": "2024-01-15",
        "item": "SKU-100",
        "location": "Dock-A",
        "adjustQtyBy": 12,
    }
