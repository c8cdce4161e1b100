# =============================================================================
# tests/test_chirp_service.py - Chirp Service Tests
# =============================================================================

from concurrent.futures import ThreadPoolExecutor

import pytest

from core.models import MAX_CHIRP_LENGTH, SortOrder
from core.services import ChirpService
from lib.utils import ErrorKind, NotFoundError, ValidationError


class TestSubmit:
    """Test chirp validation and creation."""

    @pytest.mark.parametrize("length", [1, 70, MAX_CHIRP_LENGTH])
    def test_valid_lengths_start_at_id_one(self, chirp_service, length):
        first = chirp_service.submit(1, "a" * length)
        second = chirp_service.submit(1, "b")

        assert first.id == 1
        assert first.body == "a" * length
        assert second.id == 2

    def test_too_long_rejected_and_store_unchanged(self, chirp_service, store):
        with pytest.raises(ValidationError) as exc_info:
            chirp_service.submit(1, "a" * (MAX_CHIRP_LENGTH + 1))

        assert exc_info.value.kind == ErrorKind.VALIDATION
        assert exc_info.value.code == "CHIRP_TOO_LONG"
        assert store.list_chirps() == []

    def test_empty_rejected(self, chirp_service, store):
        with pytest.raises(ValidationError):
            chirp_service.submit(1, "")

        assert store.list_chirps() == []

    def test_length_is_measured_before_trimming(self, chirp_service):
        with pytest.raises(ValidationError):
            chirp_service.submit(1, " " * 141)

    def test_whitespace_only_body_is_accepted(self, chirp_service):
        assert chirp_service.submit(1, "   ").body == "   "

    def test_length_counts_characters_not_bytes(self, chirp_service):
        chirp = chirp_service.submit(1, "é" * MAX_CHIRP_LENGTH)
        assert len(chirp.body) == MAX_CHIRP_LENGTH

    def test_profanity_masked_before_storage(self, chirp_service, store):
        chirp = chirp_service.submit(1, "what a kerfuffle today")

        assert chirp.body == "what a **** today"
        assert store.get_chirp(chirp.id).body == "what a **** today"

    def test_custom_body_filter(self, store):
        service = ChirpService(store, body_filter=str.upper)
        assert service.submit(1, "hi").body == "HI"

    def test_concurrent_submits(self, chirp_service):
        n = 30

        with ThreadPoolExecutor(max_workers=6) as pool:
            chirps = list(pool.map(lambda i: chirp_service.submit(i % 3 + 1, f"chirp {i}"), range(n)))

        assert sorted(c.id for c in chirps) == list(range(1, n + 1))


class TestList:
    """Test filtering and ordering."""

    @pytest.fixture
    def populated(self, chirp_service):
        for author, body in [(1, "a"), (2, "b"), (1, "c"), (3, "d"), (1, "e")]:
            chirp_service.submit(author, body)
        return chirp_service

    def test_default_ascending(self, populated):
        assert [c.id for c in populated.list_chirps()] == [1, 2, 3, 4, 5]

    def test_descending(self, populated):
        assert [c.id for c in populated.list_chirps(sort=SortOrder.DESC)] == [5, 4, 3, 2, 1]

    def test_filter_by_author(self, populated):
        chirps = populated.list_chirps(author_id=1)

        assert [c.id for c in chirps] == [1, 3, 5]
        assert all(c.author_id == 1 for c in chirps)

    def test_filter_by_author_descending(self, populated):
        assert [c.id for c in populated.list_chirps(author_id=1, sort=SortOrder.DESC)] == [5, 3, 1]

    def test_filter_unknown_author(self, populated):
        assert populated.list_chirps(author_id=99) == []

    def test_empty_store(self, chirp_service):
        assert chirp_service.list_chirps() == []


class TestGet:
    """Test single chirp lookup."""

    def test_get_existing(self, chirp_service):
        created = chirp_service.submit(1, "hello")
        assert chirp_service.get_chirp(created.id) == created

    def test_get_missing(self, chirp_service):
        with pytest.raises(NotFoundError):
            chirp_service.get_chirp(1)
