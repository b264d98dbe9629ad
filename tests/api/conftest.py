"""Fixtures for API tests."""
import pytest
from fastapi.testclient import TestClient

from kitchen_ops.database import get_db
from kitchen_ops.main import app


@pytest.fixture
def client(engine, db):
    """TestClient whose requests share the test session.

    Rows created by the factory fixtures are visible to the endpoints, and
    checks committed by an endpoint are visible to the test afterwards.
    """
    app.dependency_overrides[get_db] = lambda: db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.pop(get_db, None)
