# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Chirpy API:
# - test_models.py: Pydantic model and document round-trip tests
# - test_rwlock.py: Readers-writer lock behaviour
# - test_record_store.py: Persistence, id allocation, concurrency
# - test_profanity.py: Chirp body filter
# - test_auth_service.py: Password hashing, tokens, authorization gate
# - test_chirp_service.py / test_user_service.py / test_webhook_service.py
# - test_api.py: End-to-end HTTP tests through FastAPI's TestClient
#
# Run tests with: pytest
# =============================================================================
