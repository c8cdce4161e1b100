# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides a temporary record store, cheap credential service and an
#   API client bound to a temporary database
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.main, which builds the app at import

os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("WEBHOOK_API_KEY", "test-webhook-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from core.services import ChirpService, CredentialService, UserService, WebhookService
from lib.record_store import RecordStore

TEST_JWT_SECRET = "test-jwt-secret"
TEST_WEBHOOK_KEY = "test-webhook-key"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def db_path(tmp_path):
    """Location of a database document inside the test's temp dir."""
    return tmp_path / "database.json"


@pytest.fixture
def store(db_path):
    """A bootstrapped, empty record store."""
    record_store = RecordStore(db_path)
    record_store.ensure_document()
    return record_store


@pytest.fixture
def credentials():
    """Credential service with the cheapest bcrypt work factor."""
    return CredentialService(secret=TEST_JWT_SECRET, rounds=4)


@pytest.fixture
def chirp_service(store):
    return ChirpService(store)


@pytest.fixture
def user_service(store, credentials):
    return UserService(store, credentials)


@pytest.fixture
def webhook_service(store):
    return WebhookService(store, api_key=TEST_WEBHOOK_KEY)


@pytest.fixture
def test_settings(db_path):
    """Settings pointing at the temp database."""
    return Settings(
        JWT_SECRET=TEST_JWT_SECRET,
        WEBHOOK_API_KEY=TEST_WEBHOOK_KEY,
        DATABASE_PATH=str(db_path),
        BCRYPT_ROUNDS=4,
        DEBUG=True,
    )


@pytest.fixture
def client(test_settings):
    """API client; entering the context runs the app lifespan."""
    with TestClient(create_app(test_settings)) as test_client:
        yield test_client


@pytest.fixture
def signed_up_user(client):
    """Sign up and log in a user over HTTP; returns (user_json, token)."""
    response = client.post("/api/users", json={"email": "a@x.com", "password": "secret"})
    assert response.status_code == 201
    login = client.post("/api/login", json={"email": "a@x.com", "password": "secret"})
    assert login.status_code == 200
    return response.json(), login.json()["token"]
