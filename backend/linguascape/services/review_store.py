"""
Review State Store
In-memory document store for review states, partitioned by user id.
States are kept in their camelCase document form, as a document database
would hold them.
"""
import asyncio
from typing import Optional

from linguascape.config import Settings
from linguascape.models.review import ReviewState
from linguascape.services.base_service import BaseService


class ReviewStateStore(BaseService):
    """Store for ReviewState documents keyed by (user id, vocabulary item id)"""

    def __init__(self, settings: Settings | None = None):
        super().__init__(settings=settings)
        self._partitions: dict[str, dict[str, dict]] = {}
        self._locks: dict[tuple[str, str], asyncio.Lock] = {}

    @property
    def name(self) -> str:
        return "review_store"

    def lock_for(self, user_id: str, item_id: str) -> asyncio.Lock:
        """
        Lock serializing updates of one (user, item) pair.

        Two grades for the same card must not interleave their
        read-grade-write cycles.
        """
        return self._locks.setdefault((user_id, item_id), asyncio.Lock())

    async def get(self, user_id: str, item_id: str) -> Optional[ReviewState]:
        """Get a review state, or None if the item is not in the user's pool."""
        document = self._partitions.get(user_id, {}).get(item_id)
        if document is None:
            return None
        return ReviewState.from_dict(document)

    async def list_for_user(self, user_id: str) -> list[ReviewState]:
        """All review states of a user."""
        return [
            ReviewState.from_dict(document)
            for document in self._partitions.get(user_id, {}).values()
        ]

    async def put(self, user_id: str, state: ReviewState) -> ReviewState:
        """Create or replace a review state."""
        if state.user_id is None:
            state = state.model_copy(update={"user_id": user_id})
        elif state.user_id != user_id:
            raise ValueError(
                f"State belongs to user {state.user_id}, not {user_id}"
            )

        self._partitions.setdefault(user_id, {})[state.vocabulary_item_id] = state.to_dict()
        self.log_debug(f"Stored state {user_id}/{state.vocabulary_item_id}: {state.status.value}")
        return state

    async def count(self, user_id: str) -> int:
        return len(self._partitions.get(user_id, {}))
