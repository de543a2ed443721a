import pytest
import pandas as pd
from sqlalchemy import create_engine, event, insert
from sqlalchemy.pool import StaticPool

from bakery.schema import metadata, init_schema, products
from bakery.orders.queries import OrderQueries, ORDER_COLUMNS, ITEM_COLUMNS
from bakery.orders.manager import OrderManager
from bakery.catalog.queries import ProductQueries

# Test database URL
TEST_DATABASE_URL = "sqlite://"

SEED_PRODUCTS = [
    {'id': 'p-ensaymada', 'name': 'Ensaymada', 'category': 'Bread', 'price': 270.00,
     'unit_type': 'pack', 'pieces_per_pack': 6, 'is_active': True, 'baker': 'Anna'},
    {'id': 'p-pandesal', 'name': 'Pandesal', 'category': 'Bread', 'price': 5.00,
     'unit_type': 'piece', 'pieces_per_pack': None, 'is_active': True, 'baker': 'Nicole'},
    {'id': 'p-ube-cake', 'name': 'Ube Cake', 'category': 'Cakes', 'price': 250.00,
     'unit_type': 'piece', 'pieces_per_pack': None, 'is_active': True, 'baker': 'Mommy'},
    {'id': 'p-old-roll', 'name': 'Old Roll', 'category': 'Bread', 'price': 10.00,
     'unit_type': 'piece', 'pieces_per_pack': None, 'is_active': False, 'baker': ''},
]


@pytest.fixture
def engine():
    """In-memory database shared by every connection of one test"""
    test_engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(test_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    init_schema(test_engine)

    with test_engine.begin() as conn:
        conn.execute(insert(products), SEED_PRODUCTS)

    yield test_engine

    metadata.drop_all(test_engine)
    test_engine.dispose()


@pytest.fixture
def queries(engine) -> OrderQueries:
    return OrderQueries(engine)


@pytest.fixture
def manager(engine) -> OrderManager:
    return OrderManager(engine)


@pytest.fixture
def product_queries(engine) -> ProductQueries:
    return ProductQueries(engine)


@pytest.fixture
def catalog():
    """Seeded products keyed by id"""
    return {product['id']: dict(product) for product in SEED_PRODUCTS}


@pytest.fixture
def make_orders():
    """Build an orders DataFrame; missing columns get neutral defaults"""
    def _make(rows):
        defaults = {
            'customer_name': '',
            'total_amount': 0.0,
            'is_paid': False,
            'is_completed': False,
            'is_production_complete': False,
            'created_at': '2026-01-01T08:00:00+08:00',
            'updated_at': None,
        }
        records = []
        for index, row in enumerate(rows):
            record = dict(defaults, id=f"o{index + 1}")
            record.update(row)
            records.append(record)
        return pd.DataFrame(records, columns=ORDER_COLUMNS)
    return _make


@pytest.fixture
def make_items():
    """Build an items DataFrame joined with product columns"""
    def _make(rows):
        defaults = {
            'product_id': None,
            'unit_price': 0.0,
            'subtotal': 0.0,
            'created_at': None,
            'product_name': None,
            'category': None,
            'unit_type': None,
            'pieces_per_pack': None,
            'baker': None,
        }
        records = []
        for index, row in enumerate(rows):
            record = dict(defaults, id=f"i{index + 1}")
            record.update(row)
            records.append(record)
        return pd.DataFrame(records, columns=ITEM_COLUMNS)
    return _make
