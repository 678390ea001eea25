"""Shared test fixtures: a throwaway SQLite database and an API client."""

import os
import sys
import tempfile

sys.path.insert(0, os.path.dirname(__file__))

# Must be set before config.py is imported anywhere
_DB_DIR = tempfile.mkdtemp(prefix="room_mapper_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_DB_DIR, 'test.db')}"

import pytest
from fastapi.testclient import TestClient


@pytest.fixture(scope="session")
def client():
    from main import app
    with TestClient(app) as c:
        yield c


@pytest.fixture
def floor(client):
    """A fresh hotel with one floor; returns the floor JSON."""
    hotel = client.post("/api/hotels", json={
        "name": "Test Hotel",
        "image_width": 2000,
        "image_height": 1000,
    })
    assert hotel.status_code == 201, hotel.text
    resp = client.post(f"/api/hotels/{hotel.json()['id']}/floors", json={
        "floor_number": 1,
        "name": "Ground Floor",
    })
    assert resp.status_code == 201, resp.text
    return resp.json()
