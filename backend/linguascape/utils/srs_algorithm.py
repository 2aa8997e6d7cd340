"""
Spaced Repetition System (SRS) Engine
Anki-style scheduler driving the review lifecycle of vocabulary items.

Each review is graded with one of four recall grades:
AGAIN - Forgotten, the card must be relearned
HARD  - Recalled with serious difficulty
GOOD  - Recalled after some hesitation
EASY  - Recalled instantly

Status lifecycle:
new -> learning -> review -> mastered, with any AGAIN sending the item back
to learning. Mastered is not terminal.

All operations are pure: they take a ReviewState and return a new one, never
touching storage, so the engine can be shared across threads.
"""
import logging
import math
from datetime import datetime, timedelta
from typing import Any, Iterable, Optional

from linguascape.config import Settings, get_settings
from linguascape.core.exceptions import StatePreconditionError, ValidationError
from linguascape.models.review import Grade, ReviewState, ReviewStatus
from linguascape.core.time import ensure_aware


logger = logging.getLogger(__name__)


NEW_ITEM_FLUENCY = 5.0

# Fluency curve: status base + repetition bonus + ease bonus - lapse penalty
STATUS_FLUENCY_BASE = {
    ReviewStatus.LEARNING: 30.0,
    ReviewStatus.REVIEW: 55.0,
    ReviewStatus.MASTERED: 75.0,
}
REPETITION_BONUS_MAX = 25.0
EASE_BONUS_MAX = 10.0
EASE_PENALTY_MAX = 12.0
LAPSE_PENALTY_MAX = 15.0


class SRSEngine:
    """
    Spaced repetition scheduler.

    The engine adjusts review intervals based on recall:
    - Successful recalls grow the interval (1 day, then 3, then x ease)
    - AGAIN resets repetitions and makes the card due after a short delay
    - Ease factor moves with HARD/EASY and never drops below the floor

    Thresholds come from Settings so they can be tuned without code changes.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.initial_ease_factor = self.settings.SRS_INITIAL_EASE_FACTOR
        self.min_ease_factor = self.settings.SRS_MIN_EASE_FACTOR
        self.first_interval = self.settings.SRS_FIRST_INTERVAL_DAYS
        self.second_interval = self.settings.SRS_SECOND_INTERVAL_DAYS
        self.second_interval_easy = self.settings.SRS_SECOND_INTERVAL_EASY_DAYS
        self.max_interval = self.settings.SRS_MAX_INTERVAL_DAYS
        self.relearn_delay = timedelta(minutes=self.settings.SRS_RELEARN_DELAY_MINUTES)

    # ==================== GRADING ====================

    def grade_review(
        self,
        state: ReviewState,
        grade: Grade | str | int,
        now: datetime
    ) -> ReviewState:
        """
        Apply a recall grade to a review state.

        Args:
            state: Current review state
            grade: AGAIN/HARD/GOOD/EASY (member, name or ordinal 0-3)
            now: Time of the review

        Returns:
            New ReviewState; the input is left untouched

        Raises:
            ValidationError: unknown grade, or now precedes the last review
        """
        grade = self.parse_grade(grade)
        now = self._validate_now(state, now)

        ease_factor = state.ease_factor
        interval = state.current_interval_days
        repetitions = state.repetitions
        lapses = state.lapses
        status = state.status

        total_correct = state.total_correct + (1 if grade.is_correct else 0)
        total_incorrect = state.total_incorrect + (0 if grade.is_correct else 1)

        if grade is Grade.AGAIN:
            # Failing a brand-new card is not forgetting it
            if status != ReviewStatus.NEW:
                lapses += 1
            repetitions = 0
            ease_factor = ease_factor - self.settings.SRS_LAPSE_EASE_PENALTY
            interval = 0
            status = ReviewStatus.LEARNING
        else:
            repetitions += 1
            if grade is Grade.HARD:
                ease_factor = ease_factor - self.settings.SRS_HARD_EASE_PENALTY
            elif grade is Grade.EASY:
                ease_factor = ease_factor + self.settings.SRS_EASY_EASE_BONUS

        ease_factor = round(max(self.min_ease_factor, ease_factor), 2)

        if grade is Grade.AGAIN:
            next_review_at = now + self.relearn_delay
        else:
            interval = self._next_interval(grade, repetitions, interval, ease_factor)
            status = self._advance_status(status, repetitions, interval, ease_factor)
            next_review_at = now + timedelta(days=interval)

        first_learned_at = state.first_learned_at
        if state.status == ReviewStatus.NEW and first_learned_at is None:
            first_learned_at = now

        if status != state.status:
            logger.debug(
                f"Item {state.vocabulary_item_id} moved {state.status.value} -> "
                f"{status.value} (grade={grade.label}, repetitions={repetitions})"
            )

        return state.model_copy(update={
            "status": status,
            "ease_factor": ease_factor,
            "current_interval_days": interval,
            "repetitions": repetitions,
            "lapses": lapses,
            "last_reviewed_at": now,
            "next_review_at": next_review_at,
            "total_times_seen": state.total_times_seen + 1,
            "total_correct": total_correct,
            "total_incorrect": total_incorrect,
            "fluency": self.calculate_fluency(status, repetitions, ease_factor, lapses),
            "first_learned_at": first_learned_at
        })

    def _next_interval(
        self,
        grade: Grade,
        repetitions: int,
        interval: int,
        ease_factor: float
    ) -> int:
        """Days until the next review after a successful recall."""
        if repetitions == 1:
            days = self.first_interval
        elif repetitions == 2:
            days = self.second_interval_easy if grade is Grade.EASY else self.second_interval
        else:
            multiplier = ease_factor
            if grade is Grade.EASY:
                multiplier *= self.settings.SRS_EASY_INTERVAL_BONUS
            # Halves round up
            days = math.floor(max(interval, 1) * multiplier + 0.5)

        return min(max(days, 1), self.max_interval)

    def _advance_status(
        self,
        status: ReviewStatus,
        repetitions: int,
        interval: int,
        ease_factor: float
    ) -> ReviewStatus:
        """Forward transitions after a successful recall."""
        if status == ReviewStatus.NEW:
            status = ReviewStatus.LEARNING

        if (
            status == ReviewStatus.LEARNING
            and repetitions >= self.settings.SRS_REVIEW_MIN_REPETITIONS
            and interval >= self.settings.SRS_REVIEW_MIN_INTERVAL_DAYS
        ):
            status = ReviewStatus.REVIEW

        if (
            status == ReviewStatus.REVIEW
            and repetitions >= self.settings.SRS_MASTERED_MIN_REPETITIONS
            and ease_factor >= self.settings.SRS_MASTERED_MIN_EASE
        ):
            status = ReviewStatus.MASTERED

        return status

    def calculate_fluency(
        self,
        status: ReviewStatus,
        repetitions: int,
        ease_factor: float,
        lapses: int
    ) -> float:
        """
        Proficiency score between 0 and 100.

        Grows with repetitions and ease, shrinks with lapses. Every term is
        bounded so a learning card never clamps to 0 and a lapse always lowers
        the score.
        """
        if status == ReviewStatus.NEW:
            return NEW_ITEM_FLUENCY

        base = STATUS_FLUENCY_BASE[status]
        repetition_bonus = REPETITION_BONUS_MAX * repetitions / (repetitions + 2)
        ease_bonus = (ease_factor - self.initial_ease_factor) * 10
        ease_bonus = max(-EASE_PENALTY_MAX, min(EASE_BONUS_MAX, ease_bonus))
        lapse_penalty = LAPSE_PENALTY_MAX * lapses / (lapses + 3)

        fluency = base + repetition_bonus + ease_bonus - lapse_penalty
        return max(0.0, min(100.0, fluency))

    # ==================== LIFECYCLE ====================

    def initialize_review_state(
        self,
        vocabulary_item_id: str,
        now: datetime,
        user_id: Optional[str] = None,
        existing: Optional[ReviewState] = None
    ) -> ReviewState:
        """
        Create the review state of an item entering a learner's pool.

        Args:
            vocabulary_item_id: Item being added
            now: Creation time; the item is due immediately
            user_id: Owner of the state
            existing: State already stored for the pair, if any

        Raises:
            StatePreconditionError: existing state has progressed past 'new'
        """
        if existing is not None:
            if existing.status != ReviewStatus.NEW:
                raise StatePreconditionError(
                    f"Review state for item {vocabulary_item_id} already exists "
                    f"with status '{existing.status.value}'"
                )
            return existing

        return ReviewState(
            user_id=user_id,
            vocabulary_item_id=vocabulary_item_id,
            status=ReviewStatus.NEW,
            ease_factor=self.initial_ease_factor,
            current_interval_days=0,
            next_review_at=ensure_aware(now),
            fluency=NEW_ITEM_FLUENCY
        )

    def reset_review_state(self, state: ReviewState, now: datetime) -> ReviewState:
        """
        Send an item back to 'new'.

        Scheduling fields start over; lifetime counters, lapses and
        first_learned_at are history and are kept.
        """
        now = self._validate_now(state, now)
        logger.debug(f"Resetting item {state.vocabulary_item_id} from {state.status.value}")
        return state.model_copy(update={
            "status": ReviewStatus.NEW,
            "ease_factor": self.initial_ease_factor,
            "current_interval_days": 0,
            "repetitions": 0,
            "next_review_at": now,
            "fluency": NEW_ITEM_FLUENCY
        })

    # ==================== SELECTION ====================

    def select_due_items(
        self,
        pool: Iterable[ReviewState],
        now: datetime,
        limit: Optional[int] = None
    ) -> list[ReviewState]:
        """
        Items due for review, most overdue first.

        Ties on next_review_at go to the item with more lapses.
        """
        if limit is not None and (
            isinstance(limit, bool) or not isinstance(limit, int) or limit < 0
        ):
            raise ValidationError(f"Invalid limit: {limit!r}")

        now = ensure_aware(now)
        due = [state for state in pool if state.next_review_at <= now]
        due.sort(key=lambda s: (s.next_review_at, -s.lapses))
        return due if limit is None else due[:limit]

    def is_due(self, state: ReviewState, now: datetime) -> bool:
        """Check if an item is due for review."""
        return ensure_aware(now) >= state.next_review_at

    def days_until_review(self, state: ReviewState, now: datetime) -> int:
        """Get days until next review (negative if overdue)."""
        delta = state.next_review_at - ensure_aware(now)
        return delta.days

    def get_priority(self, state: ReviewState, now: datetime) -> str:
        """
        Get review priority based on how overdue the item is.

        Returns:
            'high' if very overdue, 'normal' if due, 'low' if not due yet
        """
        overdue = ensure_aware(now) - state.next_review_at
        threshold = timedelta(days=self.settings.SRS_HIGH_PRIORITY_OVERDUE_DAYS)

        if overdue > threshold:
            return "high"
        elif overdue >= timedelta(0):
            return "normal"
        else:
            return "low"

    # ==================== GRADE HELPERS ====================

    @staticmethod
    def parse_grade(value: Any) -> Grade:
        """
        Normalize a grade given as a Grade, its name or its ordinal.

        Raises:
            ValidationError: value is not one of the four grades
        """
        if isinstance(value, Grade):
            return value
        if isinstance(value, str):
            try:
                return Grade[value.strip().upper()]
            except KeyError:
                pass
        elif isinstance(value, int) and not isinstance(value, bool):
            try:
                return Grade(value)
            except ValueError:
                pass
        raise ValidationError(
            f"Invalid grade {value!r}; expected one of "
            f"{', '.join(g.label for g in Grade)}"
        )

    def grade_from_response(
        self,
        is_correct: bool,
        response_time_ms: int,
        expected_time_ms: int | None = None
    ) -> Grade:
        """
        Derive a grade from correctness and response time.

        Args:
            is_correct: Whether the answer was correct
            response_time_ms: Time taken to respond
            expected_time_ms: Expected response time

        Returns:
            AGAIN when wrong, otherwise EASY/GOOD/HARD by speed
        """
        expected_time_ms = expected_time_ms or self.settings.SESSION_EXPECTED_RESPONSE_TIME_MS
        if response_time_ms < 0:
            raise ValidationError(f"Invalid response time: {response_time_ms}")

        if not is_correct:
            return Grade.AGAIN

        ratio = response_time_ms / expected_time_ms

        if ratio <= 0.5:
            return Grade.EASY  # Very fast - instant recall
        elif ratio <= 1.0:
            return Grade.GOOD  # Normal speed
        else:
            return Grade.HARD  # Slow - serious difficulty

    def _validate_now(self, state: ReviewState, now: datetime) -> datetime:
        if not isinstance(now, datetime):
            raise ValidationError(f"Invalid review time: {now!r}")
        now = ensure_aware(now)
        if state.last_reviewed_at is not None and now < state.last_reviewed_at:
            raise ValidationError(
                f"Review time {now.isoformat()} precedes last review "
                f"{state.last_reviewed_at.isoformat()}"
            )
        return now


# Singleton instance
srs_engine = SRSEngine()


def grade_review(
    state: ReviewState,
    grade: Grade | str | int,
    now: datetime
) -> ReviewState:
    """Convenience function to grade a review with the default engine."""
    return srs_engine.grade_review(state, grade, now)


def select_due_items(
    pool: Iterable[ReviewState],
    now: datetime,
    limit: Optional[int] = None
) -> list[ReviewState]:
    """Convenience function to select due items with the default engine."""
    return srs_engine.select_due_items(pool, now, limit)


def initialize_review_state(
    vocabulary_item_id: str,
    now: datetime,
    user_id: Optional[str] = None,
    existing: Optional[ReviewState] = None
) -> ReviewState:
    """Convenience function to create a review state with the default engine."""
    return srs_engine.initialize_review_state(
        vocabulary_item_id, now, user_id=user_id, existing=existing
    )
