"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from order_tracker.config import Settings
from order_tracker.database import Database
from order_tracker.main import create_app
from order_tracker.models.order import Order
from order_tracker.services.order_service import OrderService


def make_order(**overrides):
    """Build a valid order payload."""
    order = {
        'order_id': 'A1',
        'customer_name': 'Jane Baker',
        'product_ordered': 'Sourdough Loaf',
        'quantity': '2',
        'order_date': '2024-05-01',
        'order_status': 'Pending',
    }
    order.update(overrides)
    return order


@pytest.fixture
def database():
    """Create an in-memory database with the orders table."""
    database = Database('sqlite:///:memory:')
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def session(database):
    """Create a test database session."""
    with database.session() as session:
        yield session


@pytest.fixture
def service(session):
    return OrderService(session)


@pytest.fixture(scope="session")
def app(tmp_path_factory):
    """Create the application once, backed by a temporary SQLite file."""
    db_path = tmp_path_factory.mktemp('data') / 'orders.db'
    return create_app(Settings(
        DATABASE_URL=f'sqlite:///{db_path.as_posix()}',
        LOG_LEVEL='WARNING',
    ))


@pytest.fixture
def client(app):
    """Start the application and empty the orders table."""
    with TestClient(app) as client:
        with app.state.database.session() as db:
            db.query(Order).delete()
            db.commit()
        yield client
