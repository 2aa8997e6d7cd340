"""
Session Models
Cards served in a vocabulary session and per-user vocabulary statistics.
"""
from pydantic import BaseModel, Field

from linguascape.models.review import ReviewState
from linguascape.models.vocabulary import VocabularyItem


class SessionCard(BaseModel):
    """A flashcard in a session: item content plus the learner's state"""
    item: VocabularyItem
    state: ReviewState
    is_new: bool = Field(default=False, description="Never graded before")
    priority: str = Field(default="normal", description="high, normal or low")


class VocabularyStats(BaseModel):
    """Vocabulary progress summary of a learner"""
    user_id: str
    total_words: int = 0
    new: int = 0
    learning: int = 0
    review: int = 0
    mastered: int = 0
    due_for_review: int = 0
    average_accuracy: float = Field(default=0, ge=0, le=100)
    average_fluency: float = Field(default=0, ge=0, le=100)
