# tests/conftest.py
"""
Shared fixtures.

Every test gets a fresh application backed by an in-memory SQLite database.
Google sign-in is replaced by `FakeVerifier`, which accepts the tokens listed
in `GOOGLE_USERS` and rejects everything else with a 401.
"""

import pytest
from fastapi import HTTPException, status
from fastapi.testclient import TestClient

from config import Settings
from main import create_app

CLIENT_ID = "test-client.apps.googleusercontent.com"

GOOGLE_USERS = {
    "alice-token": {
        "iss": "https://accounts.google.com",
        "aud": CLIENT_ID,
        "sub": "1001",
        "email": "alice@example.com",
        "email_verified": True,
        "name": "Alice Example",
        "picture": "https://example.com/alice.png",
    },
    "unverified-token": {
        "iss": "https://accounts.google.com",
        "aud": CLIENT_ID,
        "sub": "1002",
        "email": "mallory@example.com",
        "email_verified": False,
        "name": "Mallory",
    },
}


class FakeVerifier:
    def __init__(self, users=None):
        self.users = users if users is not None else GOOGLE_USERS

    def verify(self, token):
        if token not in self.users:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token validation failed")
        return dict(self.users[token])


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        google_api_key="test-api-key",
        google_client_id=CLIENT_ID,
        session_secret="test-secret",
        static_dir=None,
        debug=True,
    )


@pytest.fixture
def app(settings):
    return create_app(settings, token_verifier=FakeVerifier())


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_client(client):
    response = client.post("/auth/google", json={"credential": "alice-token"})
    assert response.status_code == 200, response.text
    return client


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


def make_entry(description="Office supplies", date=None, amount=100, debit_account=(6000, "Operating Expenses"),
               credit_account=(1000, "Cash")):
    """Request body for a simple two-line journal entry."""
    body = {
        "description": description,
        "lines": [
            {"account_no": debit_account[0], "account_name": debit_account[1], "debit": amount, "credit": 0},
            {"account_no": credit_account[0], "account_name": credit_account[1], "debit": 0, "credit": amount},
        ],
    }
    if date is not None:
        body["date"] = date
    return body
