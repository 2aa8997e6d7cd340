"""
Tests for the ReviewStateStore service.
"""
import pytest

from linguascape.models.review import ReviewState, ReviewStatus


class TestReviewStateStore:
    """Tests for the in-memory review store."""

    @pytest.mark.asyncio
    async def test_get_missing(self, store):
        """Test a missing pair returns None."""
        assert await store.get("user123", "word_001") is None

    @pytest.mark.asyncio
    async def test_put_and_get(self, store, review_state):
        """Test a stored state is read back unchanged."""
        await store.put("test_user_123", review_state)

        assert await store.get("test_user_123", "word_002") == review_state

    @pytest.mark.asyncio
    async def test_put_fills_user_id(self, store):
        """Test a state without owner takes the partition user id."""
        stored = await store.put("user123", ReviewState(vocabulary_item_id="word_001"))

        assert stored.user_id == "user123"
        assert (await store.get("user123", "word_001")).user_id == "user123"

    @pytest.mark.asyncio
    async def test_put_wrong_user(self, store, review_state):
        """Test storing a state under another user is rejected."""
        with pytest.raises(ValueError):
            await store.put("someone_else", review_state)

    @pytest.mark.asyncio
    async def test_put_replaces(self, store, review_state):
        """Test a second put replaces the document."""
        await store.put("test_user_123", review_state)
        updated = review_state.model_copy(update={"status": ReviewStatus.MASTERED})
        await store.put("test_user_123", updated)

        assert (await store.get("test_user_123", "word_002")).status == ReviewStatus.MASTERED
        assert await store.count("test_user_123") == 1

    @pytest.mark.asyncio
    async def test_users_partitioned(self, store):
        """Test users only see their own states."""
        await store.put("alice", ReviewState(vocabulary_item_id="word_001"))
        await store.put("alice", ReviewState(vocabulary_item_id="word_002"))
        await store.put("bob", ReviewState(vocabulary_item_id="word_001"))

        alice = await store.list_for_user("alice")

        assert {s.vocabulary_item_id for s in alice} == {"word_001", "word_002"}
        assert await store.list_for_user("carol") == []

    def test_lock_per_pair(self, store):
        """Test the same pair always gets the same lock."""
        lock = store.lock_for("alice", "word_001")

        assert store.lock_for("alice", "word_001") is lock
        assert store.lock_for("alice", "word_002") is not lock
        assert store.lock_for("bob", "word_001") is not lock
