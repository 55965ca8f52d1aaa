# tests/conftest.py
import os, sys
# put the project root (the directory holding "dritu") first on sys.path
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from dritu.server.db.session import get_session, init_db
from dritu.server.main import app


@pytest.fixture()
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as s:
        yield s


@pytest.fixture()
def client(engine):
    def _override_session():
        with Session(engine) as s:
            yield s

    app.dependency_overrides[get_session] = _override_session
    # no context manager: startup (database init + seeding) is not run
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def make_product(client):
    def _make(name="Laptop", price=85000, gst_rate=18, **extra):
        r = client.post("/products", json={"name": name, "price": price, "gst_rate": gst_rate, **extra})
        assert r.status_code == 201, r.text
        return r.json()
    return _make


@pytest.fixture()
def make_client_record(client):
    def _make(name="Dr. Rahul Sharma", institution="City Hospital", **extra):
        r = client.post("/clients", json={"name": name, "institution": institution, **extra})
        assert r.status_code == 201, r.text
        return r.json()
    return _make
