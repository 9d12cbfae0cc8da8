import mongomock
import pytest
from fastapi.testclient import TestClient

from classroom_api.core.auth import require_auth
from classroom_api.db import mongodb
from classroom_api.main import app


@pytest.fixture
def db():
    """In-memory MongoDB with the same unique indexes as production"""
    database = mongomock.MongoClient()["classroom_test"]
    mongodb.set_mongo_db(database)
    mongodb.init_mongo_indexes()
    yield database
    mongodb.set_mongo_db(None)


@pytest.fixture
def client(db):
    """Client with the login gate switched off"""
    app.dependency_overrides[require_auth] = lambda: None
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def gated_client(db):
    """Client with the real login gate"""
    app.dependency_overrides.clear()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def teacher_payload():
    return {
        "name": "Ada",
        "email": "ada@x.com",
        "phone": "123",
        "subjectsTaught": ["Math"],
        "employeeId": "E1",
    }


@pytest.fixture
def teacher(client, teacher_payload):
    response = client.post("/api/teachers", json=teacher_payload)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def student_payload(teacher):
    return {
        "name": "Bo",
        "email": "bo@x.com",
        "teacher": teacher["id"],
        "dateOfBirth": "2010-01-01",
    }
