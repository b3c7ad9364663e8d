"""
Shared test fixtures.

Every test gets its own in-memory ledger, so no state leaks
from one test into the next.
"""

import pytest
from fastapi.testclient import TestClient

from account_ledger.main import app
from account_ledger.models.base import Database


@pytest.fixture
def database():
    """A fresh, empty in-memory store."""
    database = Database()
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def db_session(database):
    """Provide a database session for direct service testing."""
    session = database.session()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client():
    """
    Provide a test client bound to a freshly started app.

    Entering the client runs the lifespan, which creates a new
    empty store for this test.
    """
    with TestClient(app) as client:
        yield client


@pytest.fixture
def open_account(client):
    """Open an account over HTTP and return its identity header."""
    def _open(cpf="123", name="Ana"):
        response = client.post("/account", json={"cpf": cpf, "name": name})
        assert response.status_code == 201
        return {"cpf": cpf}
    return _open
