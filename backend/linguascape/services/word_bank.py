"""
Word Bank Service
Serves vocabulary item content from the bundled JSON word bank.
"""
import json
from pathlib import Path
from typing import Iterable, Optional

from linguascape.config import Settings
from linguascape.core.exceptions import ItemNotFoundError
from linguascape.models.vocabulary import VocabularyItem
from linguascape.services.base_service import BaseService


class WordBank(BaseService):
    """
    Word Bank - read-only catalogue of vocabulary items.

    Items are loaded lazily from WORD_BANK_PATH and cached. New-word
    candidates are ordered by frequency rank (most common first).
    """

    def __init__(self, settings: Settings | None = None, path: Path | None = None):
        super().__init__(settings=settings)
        self.path = Path(path or self.settings.WORD_BANK_PATH)
        self._items_cache: dict[str, VocabularyItem] = {}
        self._loaded = False

    @property
    def name(self) -> str:
        return "word_bank"

    def load(self) -> None:
        """Load vocabulary items from the JSON file."""
        if self._loaded:
            return

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            self.log_error(e, {"context": "loading word bank", "path": str(self.path)})
            raise

        for word in data.get("words", []):
            item = VocabularyItem.from_dict(word)
            self._items_cache.setdefault(item.id, item)
        self._loaded = True
        self.log_debug(f"Loaded {len(self._items_cache)} words from {self.path.name}")

    def add(self, item: VocabularyItem) -> None:
        """Register an item that does not come from the file (e.g. generated)."""
        self._items_cache[item.id] = item

    def get(self, item_id: str) -> VocabularyItem:
        """Get an item by ID."""
        self.load()
        try:
            return self._items_cache[item_id]
        except KeyError:
            raise ItemNotFoundError(item_id) from None

    def list_items(
        self,
        language_code: Optional[str] = None,
        mode_id: Optional[str] = None
    ) -> list[VocabularyItem]:
        """List items, optionally filtered by language and learning mode."""
        self.load()
        return [
            item for item in self._items_cache.values()
            if (language_code is None or item.language_code == language_code)
            and (mode_id is None or item.mode_id == mode_id)
        ]

    def new_word_candidates(
        self,
        language_code: str,
        mode_id: Optional[str] = None,
        exclude_ids: Iterable[str] = (),
        limit: Optional[int] = None
    ) -> list[VocabularyItem]:
        """
        Words the learner has not started yet.

        Prefers the requested mode; falls back to the whole language when the
        mode has nothing left.
        """
        excluded = set(exclude_ids)

        available = [
            item for item in self.list_items(language_code, mode_id)
            if item.id not in excluded
        ]
        if not available and mode_id is not None:
            available = [
                item for item in self.list_items(language_code)
                if item.id not in excluded
            ]

        # Lower rank = more common; unranked words go last
        available.sort(key=lambda x: (x.frequency_rank is None, x.frequency_rank or 0, x.id))
        return available if limit is None else available[:limit]


# Singleton instance
word_bank = WordBank()
