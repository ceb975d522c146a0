from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine

from invoice_dashboard.core.cache import PageCache, get_page_cache
from invoice_dashboard.db.engine import get_engine
from invoice_dashboard.db.schema import customers, invoices, metadata, revenue
from invoice_dashboard.main import app

CUSTOMERS = [
    {"id": "abc", "name": "Amy Burns", "email": "amy@burns.com", "image_url": "/customers/amy-burns.png"},
    {"id": "c-lee", "name": "Lee Robinson", "email": "lee@robinson.com", "image_url": "/customers/lee-robinson.png"},
    {"id": "c-zed", "name": "Zed Quiet", "email": "zed@quiet.org", "image_url": "/customers/zed-quiet.png"},
]


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'test.sqlite'}", future=True)
    metadata.create_all(engine)
    yield engine
    metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def seeded_engine(engine):
    with engine.begin() as conn:
        conn.execute(customers.insert(), CUSTOMERS)
        conn.execute(
            invoices.insert(),
            [
                {"id": "inv-1", "customer_id": "abc", "amount": 15795, "status": "pending", "date": date(2022, 12, 6)},
                {"id": "inv-2", "customer_id": "c-lee", "amount": 20348, "status": "pending", "date": date(2022, 11, 14)},
                {"id": "inv-3", "customer_id": "abc", "amount": 3040, "status": "paid", "date": date(2022, 10, 29)},
                {"id": "inv-4", "customer_id": "c-lee", "amount": 44800, "status": "paid", "date": date(2023, 9, 10)},
            ],
        )
        conn.execute(
            revenue.insert(),
            [
                {"month": "Jan", "revenue": 2000},
                {"month": "Feb", "revenue": 1800},
                {"month": "Mar", "revenue": 4800},
            ],
        )
    return engine


@pytest.fixture
def page_cache():
    return PageCache()


@pytest.fixture
def client(seeded_engine, page_cache):
    app.dependency_overrides[get_engine] = lambda: seeded_engine
    app.dependency_overrides[get_page_cache] = lambda: page_cache
    yield TestClient(app)
    app.dependency_overrides.clear()


def add_invoices(engine, count, customer_id="abc", status="pending", amount=1000):
    if count == 0:
        return
    with engine.begin() as conn:
        conn.execute(
            invoices.insert(),
            [
                {
                    "customer_id": customer_id,
                    "amount": amount,
                    "status": status,
                    "date": date(2024, 1, (i % 28) + 1),
                }
                for i in range(count)
            ],
        )
