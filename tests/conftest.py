"""
Shared test fixtures — API test client and a fresh calculator session.
"""

import pytest
from fastapi.testclient import TestClient

from api.main import app
from sectioncalc import CalculatorSession


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def session():
    """A new calculator session with nothing saved."""
    return CalculatorSession()


@pytest.fixture
def session_id(client):
    """Create a session through the API and return its id."""
    response = client.post("/api/sessions", json={})
    assert response.status_code == 201
    return response.json()["session_id"]
