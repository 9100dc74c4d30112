"""
Pytest configuration and fixtures
"""

import os

# Settings are cached on first import of the app: zero the simulated delays
# and lift the rate limit before that happens
os.environ.setdefault("SIGN_IN_DELAY_MS", "0")
os.environ.setdefault("PROFILE_SAVE_DELAY_MS", "0")
os.environ.setdefault("RATE_LIMIT_REQUESTS", "100000")

import pytest
from fastapi.testclient import TestClient

from app.config import get_settings
from app.main import app
from app.models import User
from app.services.auth_service import MOCK_USER
from app.startup.seed_candidates import load_candidates


@pytest.fixture
def client():
    """Create a test client for the FastAPI application (runs the lifespan)"""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def session_id(client):
    """Open an anonymous page session"""
    response = client.post("/v1/sessions")
    assert response.status_code == 200
    return response.json()["session_id"]


@pytest.fixture
def onboarding_session_id(client, session_id):
    """Page session that has signed in and shows the profile wizard"""
    response = client.post(f"/v1/auth/{session_id}/sign-in")
    assert response.status_code == 200
    return session_id


@pytest.fixture
def active_session_id(client, onboarding_session_id):
    """Page session with a completed profile showing the dashboard"""
    sid = onboarding_session_id
    client.post(f"/v1/profile/{sid}/skills", json={"skill": "Python"})
    client.post(f"/v1/profile/{sid}/next")
    client.put(f"/v1/profile/{sid}/goals", json={"goals": "Pass finals"})
    client.post(f"/v1/profile/{sid}/next")
    client.post(f"/v1/profile/{sid}/study-times", json={"time": "Weekends"})
    response = client.post(f"/v1/profile/{sid}/submit")
    assert response.status_code == 200
    assert response.json()["phase"] == "active"
    return sid


@pytest.fixture
def user() -> User:
    return MOCK_USER


@pytest.fixture
def candidates():
    """Fresh copy of the candidate fixtures"""
    return load_candidates(get_settings().candidates_fixture_path)
