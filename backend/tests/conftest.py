"""
Pytest configuration and fixtures for tests.
"""
import pytest
from datetime import datetime, timedelta, timezone

from linguascape.config import Settings
from linguascape.models.review import ReviewState, ReviewStatus
from linguascape.services.review_store import ReviewStateStore
from linguascape.services.session_service import VocabularySessionService
from linguascape.services.word_bank import WordBank
from linguascape.utils.srs_algorithm import SRSEngine


T0 = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def t0():
    """Fixed review time so schedules are reproducible."""
    return T0


@pytest.fixture
def test_settings():
    """Settings with the default SRS thresholds."""
    return Settings(
        SRS_INITIAL_EASE_FACTOR=2.5,
        SRS_MIN_EASE_FACTOR=1.3,
        SRS_FIRST_INTERVAL_DAYS=1,
        SRS_SECOND_INTERVAL_DAYS=3,
        SRS_SECOND_INTERVAL_EASY_DAYS=6,
        SRS_MAX_INTERVAL_DAYS=365,
        SRS_RELEARN_DELAY_MINUTES=10,
        SRS_REVIEW_MIN_REPETITIONS=2,
        SRS_REVIEW_MIN_INTERVAL_DAYS=7,
        SRS_MASTERED_MIN_REPETITIONS=8,
        SRS_MASTERED_MIN_EASE=2.5,
        SESSION_WORDS_PER_SESSION=7,
        SESSION_NEW_WORDS_LIMIT=3,
        SESSION_EXPECTED_RESPONSE_TIME_MS=5000
    )


@pytest.fixture
def engine(test_settings):
    """SRS engine with test settings."""
    return SRSEngine(settings=test_settings)


@pytest.fixture
def new_state(engine, t0):
    """Freshly initialized review state."""
    return engine.initialize_review_state("word_001", t0, user_id="test_user_123")


@pytest.fixture
def review_state(t0):
    """Item in review after five successful repetitions."""
    return ReviewState(
        user_id="test_user_123",
        vocabulary_item_id="word_002",
        status=ReviewStatus.REVIEW,
        ease_factor=2.5,
        current_interval_days=20,
        repetitions=5,
        lapses=0,
        last_reviewed_at=t0 - timedelta(days=20),
        next_review_at=t0,
        total_times_seen=5,
        total_correct=5,
        total_incorrect=0,
        fluency=73.0,
        first_learned_at=t0 - timedelta(days=60)
    )


@pytest.fixture
def bank(test_settings):
    """Word bank backed by the packaged JSON file."""
    return WordBank(settings=test_settings)


@pytest.fixture
def store(test_settings):
    """Empty in-memory review store."""
    return ReviewStateStore(settings=test_settings)


@pytest.fixture
def session_service(test_settings, engine, store, bank):
    """Session service wired to fresh collaborators."""
    return VocabularySessionService(
        settings=test_settings,
        engine=engine,
        store=store,
        bank=bank
    )
