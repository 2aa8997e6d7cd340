"""
Pydantic Models Module
Contains data models for vocabulary content and review progress.
"""
from linguascape.models.vocabulary import VocabularyItem, WordType
from linguascape.models.review import ReviewState, ReviewStatus, Grade
from linguascape.models.session import SessionCard, VocabularyStats

__all__ = [
    "VocabularyItem", "WordType",
    "ReviewState", "ReviewStatus", "Grade",
    "SessionCard", "VocabularyStats"
]
