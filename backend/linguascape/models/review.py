"""
Review Models
Defines the per-learner review state of a vocabulary item and the recall grades.
"""
from datetime import datetime
from enum import Enum, IntEnum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from linguascape.core.time import utcnow, parse_iso, ensure_aware


class ReviewStatus(str, Enum):
    """Coarse lifecycle stage of a review state"""
    NEW = "new"
    LEARNING = "learning"
    REVIEW = "review"
    MASTERED = "mastered"


class Grade(IntEnum):
    """
    Recall quality reported by the learner.

    Ordinal: AGAIN < HARD < GOOD < EASY, one per flashcard response button.
    """
    AGAIN = 0
    HARD = 1
    GOOD = 2
    EASY = 3

    @property
    def label(self) -> str:
        return self.name.lower()

    @property
    def is_correct(self) -> bool:
        return self is not Grade.AGAIN


class ReviewState(BaseModel):
    """Review progress of one learner on one vocabulary item"""
    user_id: Optional[str] = None
    vocabulary_item_id: str

    status: ReviewStatus = ReviewStatus.NEW
    ease_factor: float = Field(default=2.5, ge=1.3, description="Interval growth multiplier")
    current_interval_days: int = Field(default=0, ge=0, description="Days until next review")
    repetitions: int = Field(default=0, ge=0, description="Consecutive successful reviews")
    lapses: int = Field(default=0, ge=0, description="Times forgotten after leaving 'new'")

    last_reviewed_at: Optional[datetime] = None
    next_review_at: datetime = Field(default_factory=utcnow)

    # Lifetime counters
    total_times_seen: int = Field(default=0, ge=0)
    total_correct: int = Field(default=0, ge=0)
    total_incorrect: int = Field(default=0, ge=0)

    fluency: float = Field(default=5.0, ge=0, le=100)
    first_learned_at: Optional[datetime] = None

    model_config = ConfigDict(frozen=True)

    @field_validator("last_reviewed_at", "next_review_at", "first_learned_at")
    @classmethod
    def _as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_aware(value) if value is not None else None

    @property
    def key(self) -> tuple[Optional[str], str]:
        return (self.user_id, self.vocabulary_item_id)

    @property
    def accuracy(self) -> float:
        """Share of correct answers, 0-100"""
        if not self.total_times_seen:
            return 0.0
        return round(self.total_correct / self.total_times_seen * 100, 1)

    def to_dict(self) -> dict:
        """Convert to dictionary for storage"""
        return {
            "userId": self.user_id,
            "vocabularyItemId": self.vocabulary_item_id,
            "status": self.status.value,
            "easeFactor": self.ease_factor,
            "currentIntervalDays": self.current_interval_days,
            "repetitions": self.repetitions,
            "lapses": self.lapses,
            "lastReviewedAt": self.last_reviewed_at.isoformat() if self.last_reviewed_at else None,
            "nextReviewAt": self.next_review_at.isoformat(),
            "totalTimesSeen": self.total_times_seen,
            "totalCorrect": self.total_correct,
            "totalIncorrect": self.total_incorrect,
            "fluency": self.fluency,
            "firstLearnedAt": self.first_learned_at.isoformat() if self.first_learned_at else None
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ReviewState":
        """Create from dictionary"""
        return cls(
            user_id=data.get("userId"),
            vocabulary_item_id=data["vocabularyItemId"],
            status=data.get("status", ReviewStatus.NEW),
            ease_factor=data.get("easeFactor", 2.5),
            current_interval_days=data.get("currentIntervalDays", 0),
            repetitions=data.get("repetitions", 0),
            lapses=data.get("lapses", 0),
            last_reviewed_at=parse_iso(data.get("lastReviewedAt")),
            next_review_at=parse_iso(data.get("nextReviewAt")) or utcnow(),
            total_times_seen=data.get("totalTimesSeen", 0),
            total_correct=data.get("totalCorrect", 0),
            total_incorrect=data.get("totalIncorrect", 0),
            fluency=data.get("fluency", 5.0),
            first_learned_at=parse_iso(data.get("firstLearnedAt"))
        )
