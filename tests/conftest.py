import asyncio
import os
import uuid

os.environ.setdefault("MONGO_URI", "mongodb://127.0.0.1:27017")
os.environ.setdefault("MONGO_DB", "wanderlust_test")
os.environ.setdefault("LOG_DIR", "")

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from wanderlust.database import get_db
from wanderlust.main import create_app


VALID_LISTING = {
    "title": "Cozy Beachfront Cottage",
    "description": "Escape to this charming beachfront cottage.",
    "image": "https://images.example.com/cottage.jpg",
    "price": "1500",
    "location": "Malibu",
    "country": "United States",
}


@pytest.fixture()
def db():
    return AsyncMongoMockClient()[f"wanderlust_test_{uuid.uuid4().hex}"]


@pytest.fixture()
def run():
    """Drive a store coroutine from a sync test"""
    return asyncio.run


@pytest.fixture()
def make_client():
    def _make(database):
        app = create_app()
        app.dependency_overrides[get_db] = lambda: database
        return TestClient(app, follow_redirects=False)

    return _make


@pytest.fixture()
def client(db, make_client):
    return make_client(db)


def create_listing(client, **overrides) -> str:
    r = client.post("/listings", data={**VALID_LISTING, **overrides})
    assert r.status_code == 303, r.text
    return r.headers["location"].rsplit("/", 1)[-1]


def add_review(client, listing_id: str, comment: str = "Great stay", rating: int = 5) -> None:
    r = client.post(
        f"/listings/{listing_id}/reviews",
        json={"review": {"comment": comment, "rating": rating}},
    )
    assert r.status_code == 303, r.text
