# =============================================================================
# tests/test_api.py - HTTP API Tests
# =============================================================================
# End-to-end tests through FastAPI's TestClient against a temporary
# database document.
# =============================================================================

import json

import pytest
from fastapi.testclient import TestClient

from app.main import create_app

WEBHOOK_HEADERS = {"Authorization": "ApiKey test-webhook-key"}


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# Startup
# =============================================================================

class TestStartup:
    """Test document bootstrap in the app lifespan."""

    def test_document_created_on_start(self, client, db_path):
        assert json.loads(db_path.read_text()) == {"chirps": {}, "users": {}}

    def test_reset_on_start(self, test_settings, db_path):
        db_path.write_text(json.dumps({
            "chirps": {"1": {"id": 1, "author_id": 1, "body": "old"}},
            "users": {},
        }))
        settings = test_settings.model_copy(update={"RESET_DATABASE_ON_START": True})

        with TestClient(create_app(settings)) as client:
            assert client.get("/api/chirps").json() == []

    def test_healthz(self, client):
        response = client.get("/api/healthz")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"


# =============================================================================
# Users and login
# =============================================================================

class TestUsers:
    """Test signup, login and credential updates."""

    def test_signup_hides_password(self, client):
        response = client.post("/api/users", json={"email": "a@x.com", "password": "secret"})

        assert response.status_code == 201
        assert response.json() == {"id": 1, "email": "a@x.com", "is_chirpy_red": False}

    def test_signup_duplicate_email(self, client, signed_up_user):
        response = client.post("/api/users", json={"email": "a@x.com", "password": "x"})

        assert response.status_code == 400
        assert response.json()["code"] == "EMAIL_TAKEN"

    def test_login_returns_token_for_user(self, client, signed_up_user):
        user, token = signed_up_user

        response = client.post("/api/login", json={"email": "a@x.com", "password": "secret"})

        body = response.json()
        assert body["id"] == user["id"]
        assert body["token"]
        assert client.app.state.chirpy.credentials.validate_token(body["token"]) == user["id"]

    def test_login_wrong_password(self, client, signed_up_user):
        response = client.post("/api/login", json={"email": "a@x.com", "password": "nope"})

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json()["reason"] == "bad_credentials"

    def test_update_requires_token(self, client, signed_up_user):
        response = client.put("/api/users", json={"email": "b@x.com"})

        assert response.status_code == 401
        assert response.json()["reason"] == "missing_credential"

    def test_update_credentials(self, client, signed_up_user):
        _, token = signed_up_user

        response = client.put(
            "/api/users",
            json={"email": "b@x.com", "password": "new"},
            headers=bearer(token),
        )

        assert response.status_code == 200
        assert response.json()["email"] == "b@x.com"
        assert client.post("/api/login", json={"email": "b@x.com", "password": "new"}).status_code == 200


# =============================================================================
# Chirps
# =============================================================================

class TestChirps:
    """Test posting, listing and fetching chirps."""

    def test_create_requires_token(self, client):
        response = client.post("/api/chirps", json={"body": "hello"})
        assert response.status_code == 401

    def test_create_with_invalid_token(self, client):
        response = client.post("/api/chirps", json={"body": "hello"}, headers=bearer("junk"))

        assert response.status_code == 401
        assert response.json()["reason"] == "malformed"

    def test_create_and_get(self, client, signed_up_user):
        user, token = signed_up_user

        created = client.post("/api/chirps", json={"body": "what a Fornax day"}, headers=bearer(token))

        assert created.status_code == 201
        assert created.json() == {"id": 1, "author_id": user["id"], "body": "what a **** day"}
        assert client.get("/api/chirps/1").json() == created.json()

    def test_create_too_long(self, client, signed_up_user):
        _, token = signed_up_user

        response = client.post("/api/chirps", json={"body": "x" * 141}, headers=bearer(token))

        assert response.status_code == 400
        assert response.json()["code"] == "CHIRP_TOO_LONG"
        assert client.get("/api/chirps").json() == []

    def test_list_filter_and_sort(self, client, signed_up_user):
        _, token_a = signed_up_user
        client.post("/api/users", json={"email": "b@x.com", "password": "secret"})
        token_b = client.post("/api/login", json={"email": "b@x.com", "password": "secret"}).json()["token"]
        for token, body in [(token_a, "one"), (token_b, "two"), (token_a, "three")]:
            client.post("/api/chirps", json={"body": body}, headers=bearer(token))

        all_desc = client.get("/api/chirps", params={"sort": "desc"}).json()
        by_a = client.get("/api/chirps", params={"author_id": "1"}).json()
        unknown_sort = client.get("/api/chirps", params={"sort": "sideways"}).json()

        assert [c["id"] for c in all_desc] == [3, 2, 1]
        assert [c["body"] for c in by_a] == ["one", "three"]
        assert [c["id"] for c in unknown_sort] == [1, 2, 3]

    @pytest.mark.parametrize("author_id", ["abc", "1.5", "--1", "-"])
    def test_list_invalid_author(self, client, author_id):
        response = client.get("/api/chirps", params={"author_id": author_id})

        assert response.status_code == 400
        assert response.json()["kind"] == "validation"

    @pytest.mark.parametrize("author_id", ["0", "-1", "+7"])
    def test_list_unknown_numeric_author(self, client, signed_up_user, author_id):
        _, token = signed_up_user
        client.post("/api/chirps", json={"body": "hello"}, headers=bearer(token))

        response = client.get("/api/chirps", params={"author_id": author_id})

        assert response.status_code == 200
        assert response.json() == []

    def test_get_missing(self, client):
        assert client.get("/api/chirps/42").status_code == 404

    def test_get_non_numeric_id(self, client):
        assert client.get("/api/chirps/abc").status_code == 400


# =============================================================================
# Webhooks
# =============================================================================

class TestWebhooks:
    """Test the payment provider endpoint."""

    def test_upgrade(self, client, signed_up_user):
        user, _ = signed_up_user
        payload = {"event": "user.upgraded", "data": {"user_id": user["id"]}}

        first = client.post("/api/polka/webhooks", json=payload, headers=WEBHOOK_HEADERS)
        second = client.post("/api/polka/webhooks", json=payload, headers=WEBHOOK_HEADERS)

        assert first.status_code == 204
        assert second.status_code == 204
        login = client.post("/api/login", json={"email": "a@x.com", "password": "secret"})
        assert login.json()["is_chirpy_red"] is True

    def test_unknown_user(self, client):
        payload = {"event": "user.upgraded", "data": {"user_id": 99}}

        response = client.post("/api/polka/webhooks", json=payload, headers=WEBHOOK_HEADERS)

        assert response.status_code == 404

    def test_ignored_event(self, client):
        payload = {"event": "user.payment_failed", "data": {"user_id": 99}}

        response = client.post("/api/polka/webhooks", json=payload, headers=WEBHOOK_HEADERS)

        assert response.status_code == 204

    @pytest.mark.parametrize("headers", [
        {},
        {"Authorization": "ApiKey wrong"},
        {"Authorization": "Bearer test-webhook-key"},
    ])
    def test_bad_api_key(self, client, headers):
        payload = {"event": "user.upgraded", "data": {"user_id": 1}}

        response = client.post("/api/polka/webhooks", json=payload, headers=headers)

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "ApiKey"

    def test_ignored_event_without_data(self, client):
        response = client.post(
            "/api/polka/webhooks", json={"event": "user.payment_failed"}, headers=WEBHOOK_HEADERS
        )

        assert response.status_code == 204

    def test_upgrade_without_data(self, client):
        response = client.post(
            "/api/polka/webhooks", json={"event": "user.upgraded"}, headers=WEBHOOK_HEADERS
        )

        assert response.status_code == 400
        assert response.json()["code"] == "WEBHOOK_MISSING_USER_ID"

    @pytest.mark.parametrize("payload", [
        {"event": "user.upgraded"},
        {"event": "user.payment_failed"},
        {},
    ])
    def test_wrong_key_checked_before_body(self, client, payload):
        response = client.post(
            "/api/polka/webhooks", json=payload, headers={"Authorization": "ApiKey wrong"}
        )

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "ApiKey"


# =============================================================================
# Admin
# =============================================================================

class TestAdmin:
    """Test metrics and reset."""

    def test_metrics_count_api_requests(self, client):
        client.get("/api/chirps")
        client.get("/api/chirps")

        assert client.get("/admin/metrics").json() == {"hits": 2}

    def test_reset_in_debug(self, client, signed_up_user):
        response = client.post("/admin/reset")

        assert response.status_code == 200
        assert client.app.state.chirpy.store.load_document().users == {}
        assert client.get("/admin/metrics").json() == {"hits": 0}

    def test_reset_refused_without_debug(self, test_settings):
        settings = test_settings.model_copy(update={"DEBUG": False})

        with TestClient(create_app(settings)) as client:
            assert client.post("/admin/reset").status_code == 403
