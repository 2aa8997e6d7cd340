"""
Vocabulary Session Service
Runs flashcard sessions on top of the SRS engine.

Responsibilities:
- Select cards for a session (due reviews first, then new words)
- Feed learner grades into the engine and store the result
- Serialize updates per (user, item) so concurrent answers cannot interleave
- Summarize a learner's vocabulary progress
"""
from datetime import datetime
from typing import Optional

from linguascape.config import Settings
from linguascape.core.exceptions import SRSError
from linguascape.core.time import ensure_aware, utcnow
from linguascape.models.review import Grade, ReviewState, ReviewStatus
from linguascape.models.session import SessionCard, VocabularyStats
from linguascape.services.base_service import BaseService
from linguascape.services.review_store import ReviewStateStore
from linguascape.services.word_bank import WordBank, word_bank
from linguascape.utils.srs_algorithm import SRSEngine, srs_engine


class VocabularySessionService(BaseService):
    """
    Vocabulary Session Service - the caller side of the SRS engine.

    The engine is pure; this service owns persistence (through the review
    store) and the per-card locking the engine leaves to its caller.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        engine: SRSEngine | None = None,
        store: ReviewStateStore | None = None,
        bank: WordBank | None = None
    ):
        super().__init__(settings=settings)
        if engine is None:
            engine = SRSEngine(settings) if settings is not None else srs_engine
        self.engine = engine
        self.store = store or ReviewStateStore(settings=self.settings)
        self.bank = bank or word_bank

    @property
    def name(self) -> str:
        return "vocabulary_session"

    # ==================== POOL ====================

    async def enroll_item(
        self,
        user_id: str,
        item_id: str,
        now: Optional[datetime] = None
    ) -> ReviewState:
        """
        Add a word to the learner's active pool.

        Raises:
            ItemNotFoundError: the word bank has no such item
            StatePreconditionError: the learner already progressed on it
        """
        self.bank.get(item_id)
        now = ensure_aware(now or utcnow())

        async with self.store.lock_for(user_id, item_id):
            existing = await self.store.get(user_id, item_id)
            state = self.engine.initialize_review_state(
                item_id, now, user_id=user_id, existing=existing
            )
            if existing is None:
                state = await self.store.put(user_id, state)
                self.log_debug(f"Enrolled {item_id} for user {user_id}")
        return state

    async def reset_item(
        self,
        user_id: str,
        item_id: str,
        now: Optional[datetime] = None
    ) -> ReviewState:
        """Start an item over from 'new', keeping its history counters."""
        self.bank.get(item_id)
        now = ensure_aware(now or utcnow())

        async with self.store.lock_for(user_id, item_id):
            state = await self.store.get(user_id, item_id)
            if state is None:
                state = self.engine.initialize_review_state(item_id, now, user_id=user_id)
            else:
                state = self.engine.reset_review_state(state, now)
            return await self.store.put(user_id, state)

    # ==================== SESSIONS ====================

    async def build_session(
        self,
        user_id: str,
        language_code: str,
        mode_id: Optional[str] = None,
        now: Optional[datetime] = None,
        limit: Optional[int] = None
    ) -> list[SessionCard]:
        """
        Select the cards of a vocabulary session.

        Priority:
        1. Items due for review (most overdue first, then most lapses)
        2. New words from the word bank (most common first)

        New cards, whether already enrolled or freshly drawn from the word
        bank, never exceed SESSION_NEW_WORDS_LIMIT.
        """
        limit = self.settings.SESSION_WORDS_PER_SESSION if limit is None else limit
        now = ensure_aware(now or utcnow())
        self.log_start("build_session", {
            "user_id": user_id,
            "language_code": language_code,
            "mode_id": mode_id
        })

        language_ids = {item.id for item in self.bank.list_items(language_code)}
        pool = [
            state for state in await self.store.list_for_user(user_id)
            if state.vocabulary_item_id in language_ids
        ]

        # Enrolled but never graded words share the new-word budget
        new_budget = self.settings.SESSION_NEW_WORDS_LIMIT
        cards = []
        for state in self.engine.select_due_items(pool, now):
            if len(cards) >= limit:
                break
            is_new = state.status == ReviewStatus.NEW
            if is_new:
                if new_budget <= 0:
                    continue
                new_budget -= 1
            cards.append(SessionCard(
                item=self.bank.get(state.vocabulary_item_id),
                state=state,
                is_new=is_new,
                priority=self.engine.get_priority(state, now)
            ))
        self.log_debug(f"Found {len(cards)} due items")

        new_slots = min(limit - len(cards), new_budget)
        if new_slots > 0:
            known_ids = {state.vocabulary_item_id for state in pool}
            for item in self.bank.new_word_candidates(
                language_code, mode_id, exclude_ids=known_ids, limit=new_slots
            ):
                state = await self.enroll_item(user_id, item.id, now)
                cards.append(SessionCard(item=item, state=state, is_new=True))

        self.log_complete("build_session", {"cards": len(cards)})
        return cards

    async def submit_grade(
        self,
        user_id: str,
        item_id: str,
        grade: Grade | str | int,
        now: Optional[datetime] = None
    ) -> ReviewState:
        """
        Grade a card and store the new state.

        An item not yet in the pool is enrolled first. When grading fails the
        stored state is left as it was, so the card stays due.
        """
        self.bank.get(item_id)
        now = ensure_aware(now or utcnow())

        async with self.store.lock_for(user_id, item_id):
            state = await self.store.get(user_id, item_id)
            if state is None:
                state = self.engine.initialize_review_state(item_id, now, user_id=user_id)

            try:
                updated = self.engine.grade_review(state, grade, now)
            except SRSError as e:
                self.log_error(e, {"user_id": user_id, "item_id": item_id, "grade": grade})
                raise

            updated = await self.store.put(user_id, updated)

        self.logger.info(
            f"[{self.name}] {user_id}/{item_id} graded {self.engine.parse_grade(grade).label}: "
            f"{state.status.value} -> {updated.status.value}, "
            f"next review in {updated.current_interval_days} days"
        )
        return updated

    async def submit_answer(
        self,
        user_id: str,
        item_id: str,
        is_correct: bool,
        response_time_ms: int,
        now: Optional[datetime] = None
    ) -> ReviewState:
        """Grade a card from an exercise answer and its response time."""
        grade = self.engine.grade_from_response(is_correct, response_time_ms)
        return await self.submit_grade(user_id, item_id, grade, now)

    # ==================== STATS ====================

    async def get_vocabulary_stats(
        self,
        user_id: str,
        now: Optional[datetime] = None
    ) -> VocabularyStats:
        """Get vocabulary statistics for a user."""
        now = ensure_aware(now or utcnow())
        states = await self.store.list_for_user(user_id)

        if not states:
            return VocabularyStats(user_id=user_id)

        by_status = {status: 0 for status in ReviewStatus}
        for state in states:
            by_status[state.status] += 1

        total_seen = sum(s.total_times_seen for s in states)
        total_correct = sum(s.total_correct for s in states)

        return VocabularyStats(
            user_id=user_id,
            total_words=len(states),
            new=by_status[ReviewStatus.NEW],
            learning=by_status[ReviewStatus.LEARNING],
            review=by_status[ReviewStatus.REVIEW],
            mastered=by_status[ReviewStatus.MASTERED],
            due_for_review=len(self.engine.select_due_items(states, now)),
            average_accuracy=round(total_correct / total_seen * 100, 1) if total_seen > 0 else 0,
            average_fluency=round(sum(s.fluency for s in states) / len(states), 1)
        )


# Singleton instance
vocabulary_session_service = VocabularySessionService()
