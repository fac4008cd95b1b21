import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from freshbox.core.config import settings
from freshbox.core.monitoring import monitoring
from freshbox.db.base import Base
from freshbox.db.deps import get_db, get_session_factory
from freshbox.main import app
from freshbox.models.catalog import BoxType, Product
from freshbox.services.catalog_seed import seed_default_catalog


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        dbapi_connection.execute("PRAGMA foreign_keys=ON")

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def catalog(session_factory):
    """Seed the starter catalog and return ids by name."""
    session = session_factory()
    try:
        seed_default_catalog(session)
        return {
            "box_types": {box.name: box.id for box in session.query(BoxType).all()},
            "products": {product.name: product.id for product in session.query(Product).all()},
        }
    finally:
        session.close()


@pytest.fixture
def client(session_factory, monkeypatch):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    monkeypatch.setattr(settings, "PAYMENT_CALLBACK_DELAY_SECONDS", 0)
    monitoring.reset()

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def order_payload(catalog):
    """Builds a checkout body: two apples and three bananas in a Small Box."""
    def build(email="ayesha@example.com", items=None, **overrides):
        payload = {
            "customer": {
                "firstName": "Ayesha",
                "lastName": "Khan",
                "email": email,
                "phone": "03001234567",
                "address": "House 12, Street 4, Gulberg",
                "city": "Lahore",
            },
            "boxTypeId": catalog["box_types"]["Small Box"],
            "paymentMethod": "easypaisa",
            "specialInstructions": "Ring the bell twice",
            "items": items if items is not None else [
                {"productId": catalog["products"]["Fresh Apples"], "quantity": "2", "unitPrice": "150.00"},
                {"productId": catalog["products"]["Bananas"], "quantity": "3", "unitPrice": "80.00"},
            ],
        }
        payload.update(overrides)
        return payload

    return build
