import os

# keep the module-level engine off the filesystem
os.environ["DATABASE_URL"] = "sqlite://"

from datetime import datetime  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from db.collection import StoredCollection  # noqa: E402
from db.database import Base, make_engine  # noqa: E402
from db.store import ChangeChannel, CollectionStore, STOCK_ITEMS, get_store  # noqa: E402
from schemas.inventory import StockItem  # noqa: E402
from services.catalog import Catalog  # noqa: E402
from services.ledger import Ledger  # noqa: E402

FIXED_NOW = datetime(2025, 6, 3, 14, 44)


@pytest.fixture
def session_factory():
    engine = make_engine("sqlite://")
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    engine.dispose()


@pytest.fixture
def channel():
    return ChangeChannel()


@pytest.fixture
def store(session_factory, channel):
    return CollectionStore(session_factory, channel=channel)


@pytest.fixture
def ledger(store):
    return Ledger(store, clock=lambda: FIXED_NOW)


@pytest.fixture
def catalog(store):
    return Catalog(store, clock=lambda: FIXED_NOW)


@pytest.fixture
def tomatoes(store):
    """A stock item with reorder level 10 and no history yet."""
    item = StockItem(id=1, name="Tomatoes", category="Vegetables", measuring_unit="kg", reorder_level=10, price=120)
    store.write(STOCK_ITEMS, [item.to_record()])
    return item


@pytest.fixture
def app(store):
    from main import app

    app.dependency_overrides[get_store] = lambda: store
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    # entering the client runs the start-up reconciliation
    with TestClient(app) as client:
        yield client


@pytest.fixture
def write_raw(session_factory):
    """Store text under ``key`` verbatim, bypassing JSON serialization."""

    def write(key, raw):
        with session_factory() as db:
            db.merge(StoredCollection(key=key, value=raw, updated_at=datetime.now()))
            db.commit()

    return write
