import datetime as dt

import pytest
from fastapi.testclient import TestClient

from fintrack.data.schemas import UserInsert
from fintrack.data.seed import seed_demo_data
from fintrack.data.store import LedgerStore
from fintrack.main import create_app

TODAY = dt.date(2024, 3, 15)


@pytest.fixture
def store():
    """Empty ledger with a single user (id 1) and no balance yet."""
    s = LedgerStore()
    s.create_user(UserInsert(username="ana", password="secret", name="Ana", email="ana@example.com"))
    return s


@pytest.fixture
def seeded_store():
    s = LedgerStore()
    seed_demo_data(s, today=TODAY)
    return s


@pytest.fixture
def client():
    with TestClient(create_app(store=LedgerStore(), seed=True)) as c:
        yield c


@pytest.fixture
def empty_client(store):
    with TestClient(create_app(store=store, seed=False)) as c:
        yield c
