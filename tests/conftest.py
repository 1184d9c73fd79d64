"""
Pytest fixtures for Career Hub API tests.
Uses an in-memory mongomock client, provides test users, auth tokens,
a company and a job posting.
"""
import os
from datetime import datetime

import mongomock
import pytest
from fastapi.testclient import TestClient

# Set before config loads
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["MONGODB_DB"] = "career_hub_test"

import app.db.mongodb as mongodb_module
from app.main import app
from app.core.auth import create_access_token, hash_password
from app.db.mongodb import COLLECTIONS, init_mongo_indexes
from app.services.mongo_service import UserService

TEST_PASSWORD = "Testpass1!"


@pytest.fixture(autouse=True)
def mongo_db():
    """Fresh in-memory database per test, with the real indexes."""
    mongodb_module._client = mongomock.MongoClient()
    mongodb_module._db = None
    init_mongo_indexes()
    yield mongodb_module.get_mongo_db()
    mongodb_module._client = None
    mongodb_module._db = None


@pytest.fixture
def client():
    return TestClient(app)


def _make_user(email: str, full_name: str) -> str:
    return UserService().insert(email, hash_password(TEST_PASSWORD), full_name)


def _headers(user_id: str) -> dict:
    token = create_access_token(data={"sub": user_id})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def test_user():
    """Id of a registered user."""
    return _make_user("test@example.com", "Test User")


@pytest.fixture
def auth_headers(test_user):
    return _headers(test_user)


@pytest.fixture
def other_user():
    return _make_user("other@example.com", "Other User")


@pytest.fixture
def other_headers(other_user):
    return _headers(other_user)


@pytest.fixture
def company(mongo_db):
    mongo_db[COLLECTIONS["companies"]].insert_one({
        "_id": "c1",
        "name": "TechCorp",
        "industry": "Software",
        "location": "San Francisco, CA",
    })
    return "c1"


@pytest.fixture
def jobs(mongo_db, company):
    """Two postings at TechCorp and one at StartupXYZ."""
    mongo_db[COLLECTIONS["companies"]].insert_one({"_id": "c2", "name": "StartupXYZ"})
    mongo_db[COLLECTIONS["jobs"]].insert_many([
        {
            "_id": "job1", "title": "Senior Frontend Developer", "company_id": "c1",
            "location": "San Francisco, CA", "job_type": "full-time", "remote": True,
            "salary": {"min": 120000, "max": 150000, "currency": "USD"},
            "created_at": datetime(2024, 1, 1),
        },
        {
            "_id": "job2", "title": "Full Stack Engineer", "company_id": "c2",
            "location": "New York, NY", "job_type": "full-time", "remote": False,
            "created_at": datetime(2024, 1, 2),
        },
        {
            "_id": "job3", "title": "React Developer", "company_id": "c1",
            "location": "Austin, TX", "job_type": "contract", "remote": True,
            "created_at": datetime(2024, 1, 3),
        },
    ])
    return ["job1", "job2", "job3"]


@pytest.fixture
def review_payload(company):
    return {
        "companyId": company,
        "rating": 4,
        "title": "Good culture",
        "content": "Twenty-plus characters of real feedback text.",
        "workEnvironment": 4,
        "compensation": 3,
        "careerGrowth": 5,
        "pros": ["Flexible hours"],
        "cons": [],
    }
