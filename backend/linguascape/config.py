"""
Configuration settings for the LinguaScape SRS engine.
All environment variables and scheduler constants are centralized here.
"""
from pathlib import Path
from pydantic_settings import BaseSettings
from functools import lru_cache


DEFAULT_WORD_BANK_PATH = Path(__file__).parent / "data" / "word_bank.json"


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    APP_NAME: str = "LinguaScape SRS"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"  # development, staging, production

    # SRS (Spaced Repetition System) - ease factor
    SRS_INITIAL_EASE_FACTOR: float = 2.5
    SRS_MIN_EASE_FACTOR: float = 1.3
    SRS_LAPSE_EASE_PENALTY: float = 0.2
    SRS_HARD_EASE_PENALTY: float = 0.15
    SRS_EASY_EASE_BONUS: float = 0.15
    SRS_EASY_INTERVAL_BONUS: float = 1.3

    # SRS - intervals
    SRS_FIRST_INTERVAL_DAYS: int = 1
    SRS_SECOND_INTERVAL_DAYS: int = 3
    SRS_SECOND_INTERVAL_EASY_DAYS: int = 6
    SRS_MAX_INTERVAL_DAYS: int = 365
    SRS_RELEARN_DELAY_MINUTES: int = 10

    # SRS - status transitions
    SRS_REVIEW_MIN_REPETITIONS: int = 2
    SRS_REVIEW_MIN_INTERVAL_DAYS: int = 7
    SRS_MASTERED_MIN_REPETITIONS: int = 8
    SRS_MASTERED_MIN_EASE: float = 2.5

    # Priority
    SRS_HIGH_PRIORITY_OVERDUE_DAYS: int = 7

    # Vocabulary sessions
    SESSION_WORDS_PER_SESSION: int = 7
    SESSION_NEW_WORDS_LIMIT: int = 3
    SESSION_EXPECTED_RESPONSE_TIME_MS: int = 5000

    # Word bank
    WORD_BANK_PATH: Path = DEFAULT_WORD_BANK_PATH

    # Logging
    LOG_LEVEL: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure settings are loaded only once.
    """
    return Settings()


# Singleton instance
settings = get_settings()
