"""
SRS Exceptions
Error taxonomy shared by the engine and the session services.
"""


class SRSError(Exception):
    """Base class for every error raised by the SRS package"""


class ValidationError(SRSError, ValueError):
    """
    Input rejected before any state change.

    Raised for an unknown grade, a review timestamp earlier than the last
    review, or an invalid selection limit. Retrying with the same input fails
    again.
    """


class StatePreconditionError(SRSError):
    """An operation was called on a review state in the wrong lifecycle stage"""


class ItemNotFoundError(SRSError, KeyError):
    """Vocabulary item id unknown to the word bank"""

    def __init__(self, item_id: str):
        super().__init__(item_id)
        self.item_id = item_id

    def __str__(self) -> str:
        return f"Vocabulary item not found: {self.item_id}"
