"""
Base Service
Abstract base class for the vocabulary services.
Provides common interface, settings and logging helpers.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any

from linguascape.config import Settings, get_settings


class BaseService(ABC):
    """
    Abstract base class for all services.

    Each service should:
    - Own a single concern (word bank, review storage, sessions)
    - Read its thresholds from Settings
    - Log its operations for debugging
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

        # Setup logging for this service
        self.logger = logging.getLogger(f"service.{self.name}")

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name for logging and identification"""
        pass

    def log_start(self, operation: str, context: dict | None = None) -> None:
        """Log the start of an operation"""
        msg = f"[{self.name}] Starting {operation}"
        if context:
            msg += f" - Context: {context}"
        self.logger.info(msg)

    def log_complete(self, operation: str, result: Any = None) -> None:
        """Log an operation completed"""
        msg = f"[{self.name}] {operation} complete"
        if result:
            msg += f" - Result: {result}"
        self.logger.info(msg)

    def log_error(self, error: Exception, context: dict | None = None) -> None:
        """Log service error"""
        msg = f"[{self.name}] Error: {str(error)}"
        if context:
            msg += f" - Context: {context}"
        self.logger.error(msg, exc_info=True)

    def log_debug(self, message: str, data: Any = None) -> None:
        """Log debug information"""
        msg = f"[{self.name}] {message}"
        if data:
            msg += f" - Data: {data}"
        self.logger.debug(msg)
