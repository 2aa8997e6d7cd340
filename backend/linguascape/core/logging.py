"""
Logging setup.
Configures the root logger from application settings.
"""
import logging

from linguascape.config import Settings, get_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging with the level and format from settings."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format=settings.LOG_FORMAT
    )
    logging.getLogger(__name__).info(
        f"Logging configured for {settings.APP_NAME} v{settings.APP_VERSION} "
        f"({settings.ENVIRONMENT})"
    )
