"""
Vocabulary Models
Defines vocabulary item content, as served from the word bank.
"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class WordType(str, Enum):
    """Word class of a vocabulary item"""
    NOUN = "noun"
    VERB = "verb"
    ADJECTIVE = "adjective"
    PHRASE = "phrase"
    OTHER = "other"


class VocabularyItem(BaseModel):
    """Vocabulary item definition. Content never changes after creation."""
    id: str
    word: str = Field(..., description="Word or phrase in the target language")
    translation: str = Field(..., description="Translation in the learner's native language")
    example_sentence: Optional[str] = None
    audio_url: Optional[str] = None
    image_url: Optional[str] = None

    # Classification
    word_type: WordType = WordType.OTHER
    language_code: str = Field(..., description="Target language code, e.g. 'es'")
    mode_id: str = Field(default="conversational", description="Learning mode / context tag")
    frequency_rank: Optional[int] = Field(default=None, ge=1, description="1 = most common")
    tags: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_dict(cls, data: dict) -> "VocabularyItem":
        """Create from a word bank entry (camelCase keys)"""
        return cls(
            id=data["id"],
            word=data["word"],
            translation=data.get("translation") or data.get("translationToNative", ""),
            example_sentence=data.get("exampleSentence"),
            audio_url=data.get("audioUrl"),
            image_url=data.get("imageUrl"),
            word_type=data.get("wordType", WordType.OTHER),
            language_code=data["languageCode"],
            mode_id=data.get("modeId", "conversational"),
            frequency_rank=data.get("frequencyRank"),
            tags=data.get("tags", [])
        )
