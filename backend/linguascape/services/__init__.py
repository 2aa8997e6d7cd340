"""
Services Module
Word bank, review state storage and vocabulary sessions.
"""
from linguascape.services.word_bank import WordBank, word_bank
from linguascape.services.review_store import ReviewStateStore
from linguascape.services.session_service import (
    VocabularySessionService,
    vocabulary_session_service
)

__all__ = [
    "WordBank", "word_bank",
    "ReviewStateStore",
    "VocabularySessionService", "vocabulary_session_service"
]
