"""
Core Module
Exceptions and logging setup shared across the package.
"""
from linguascape.core.exceptions import (
    SRSError,
    ValidationError,
    StatePreconditionError,
    ItemNotFoundError
)
from linguascape.core.logging import configure_logging

__all__ = [
    "SRSError", "ValidationError", "StatePreconditionError", "ItemNotFoundError",
    "configure_logging"
]
