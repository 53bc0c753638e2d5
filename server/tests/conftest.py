"""
Shared fixtures. Every test gets its own application and store.
"""

import pytest
from fastapi.testclient import TestClient

from driving_school.config import Settings
from driving_school.main import create_app
from driving_school.storage import InMemoryStore


@pytest.fixture
def settings():
    """Settings independent of the developer's environment."""
    return Settings(environment="test", log_level="WARNING", _env_file=None)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def app(settings, store):
    return create_app(settings=settings, store=store)


@pytest.fixture
def client(app):
    """Test client that turns server errors into 500 responses instead of raising."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def student_payload():
    return {"name": "Alice Johnson", "email": "alice@test.com", "phone": "5551234567"}


@pytest.fixture
def instructor_payload():
    return {"name": "Bob Smith", "email": "bob@test.com", "specialization": "advanced"}


@pytest.fixture
def lesson_payload():
    return {"studentId": 1, "instructorId": 1, "date": "2025-12-15", "duration": 90}


@pytest.fixture
def report_payload():
    return {"type": "attendance", "startDate": "2025-12-01", "endDate": "2025-12-31"}
