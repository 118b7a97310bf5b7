import asyncio

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from api.main import app
from models.database import get_database, init_indexes


@pytest.fixture
def database():
    database = AsyncMongoMockClient()["exercise_tracker_test"]
    asyncio.run(init_indexes(database))
    return database


@pytest.fixture
def client(database):
    app.dependency_overrides[get_database] = lambda: database
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    def _register(username):
        response = client.post("/api/exercise/new-user", json={"username": username})
        assert response.status_code == 200
        return response.json()
    return _register


@pytest.fixture
def add_exercise(client):
    def _add(user_id, duration=10, date=None, description="run"):
        payload = {"userId": user_id, "description": description, "duration": duration}
        if date is not None:
            payload["date"] = date
        return client.post("/api/exercise/add", json=payload).json()
    return _add
