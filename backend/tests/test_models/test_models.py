"""
Tests for vocabulary and review models.
"""
import pytest
from datetime import datetime, timedelta, timezone
from pydantic import ValidationError as PydanticValidationError

from linguascape.models.review import Grade, ReviewState, ReviewStatus
from linguascape.models.vocabulary import VocabularyItem, WordType


@pytest.fixture
def sample_word_data():
    """Sample word bank entry."""
    return {
        "id": "es_v8",
        "languageCode": "es",
        "modeId": "travel",
        "word": "Agua",
        "translation": "Water",
        "wordType": "noun",
        "frequencyRank": 2,
        "exampleSentence": "Necesito agua para el viaje largo.",
        "audioUrl": "https://cdn.example.com/es/agua.mp3",
        "tags": ["food"]
    }


class TestVocabularyItem:
    """Tests for VocabularyItem."""

    def test_from_dict(self, sample_word_data):
        """Test creating an item from a word bank entry."""
        item = VocabularyItem.from_dict(sample_word_data)

        assert item.id == "es_v8"
        assert item.word == "Agua"
        assert item.translation == "Water"
        assert item.word_type == WordType.NOUN
        assert item.language_code == "es"
        assert item.mode_id == "travel"
        assert item.audio_url == "https://cdn.example.com/es/agua.mp3"
        assert item.image_url is None
        assert item.tags == ["food"]

    def test_translation_to_native_key(self, sample_word_data):
        """Test the translationToNative key is accepted."""
        del sample_word_data["translation"]
        sample_word_data["translationToNative"] = "Water"

        assert VocabularyItem.from_dict(sample_word_data).translation == "Water"

    def test_invalid_word_type(self, sample_word_data):
        """Test unknown word types are rejected."""
        sample_word_data["wordType"] = "pronoun"

        with pytest.raises(PydanticValidationError):
            VocabularyItem.from_dict(sample_word_data)

    def test_immutable(self, sample_word_data):
        """Test item content cannot change after creation."""
        item = VocabularyItem.from_dict(sample_word_data)

        with pytest.raises(PydanticValidationError):
            item.word = "Fuego"


class TestGrade:
    """Tests for Grade."""

    def test_labels(self):
        """Test grade labels match the response buttons."""
        assert [g.label for g in Grade] == ["again", "hard", "good", "easy"]

    def test_is_correct(self):
        """Test only again counts as incorrect."""
        assert Grade.AGAIN.is_correct is False
        assert all(g.is_correct for g in (Grade.HARD, Grade.GOOD, Grade.EASY))


class TestReviewState:
    """Tests for ReviewState."""

    def test_defaults(self):
        """Test a bare state starts new."""
        state = ReviewState(vocabulary_item_id="word_001")

        assert state.status == ReviewStatus.NEW
        assert state.ease_factor == 2.5
        assert state.accuracy == 0.0
        assert state.next_review_at.tzinfo is not None

    def test_naive_datetimes_become_utc(self):
        """Test naive timestamps are stored as UTC."""
        state = ReviewState(
            vocabulary_item_id="word_001",
            next_review_at=datetime(2024, 3, 1, 9, 0)
        )

        assert state.next_review_at == datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)

    def test_negative_counters_rejected(self):
        """Test counters cannot be negative."""
        with pytest.raises(PydanticValidationError):
            ReviewState(vocabulary_item_id="word_001", lapses=-1)

    def test_immutable(self):
        """Test a state is changed only through copies."""
        state = ReviewState(vocabulary_item_id="word_001")

        with pytest.raises(PydanticValidationError):
            state.repetitions = 3

        assert state.model_copy(update={"repetitions": 3}).repetitions == 3

    def test_ease_below_floor_rejected(self):
        """Test ease factor cannot start below the 1.3 floor."""
        with pytest.raises(PydanticValidationError):
            ReviewState(vocabulary_item_id="word_001", ease_factor=0.5)

        with pytest.raises(PydanticValidationError):
            ReviewState.from_dict({"vocabularyItemId": "word_001", "easeFactor": 1.29})

        assert ReviewState(vocabulary_item_id="word_001", ease_factor=1.3).ease_factor == 1.3

    def test_accuracy(self):
        """Test accuracy percentage."""
        state = ReviewState(
            vocabulary_item_id="word_001",
            total_times_seen=3,
            total_correct=2,
            total_incorrect=1
        )

        assert state.accuracy == 66.7

    def test_to_dict_layout(self, t0):
        """Test the stored document uses camelCase keys and ISO timestamps."""
        state = ReviewState(
            user_id="user123",
            vocabulary_item_id="word_001",
            status=ReviewStatus.REVIEW,
            last_reviewed_at=t0,
            next_review_at=t0 + timedelta(days=8)
        )

        data = state.to_dict()

        assert data["userId"] == "user123"
        assert data["vocabularyItemId"] == "word_001"
        assert data["status"] == "review"
        assert data["lastReviewedAt"] == "2024-03-01T09:00:00+00:00"
        assert data["nextReviewAt"] == "2024-03-09T09:00:00+00:00"
        assert data["firstLearnedAt"] is None

    def test_from_dict_restores_state(self, review_state):
        """Test a stored document restores the same state."""
        assert ReviewState.from_dict(review_state.to_dict()) == review_state

    def test_from_dict_defaults(self):
        """Test missing fields fall back to defaults."""
        state = ReviewState.from_dict({"vocabularyItemId": "word_001", "status": "learning"})

        assert state.status == ReviewStatus.LEARNING
        assert state.last_reviewed_at is None
        assert state.total_times_seen == 0
