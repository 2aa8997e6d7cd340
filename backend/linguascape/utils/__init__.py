"""
Utilities Module
Contains the SRS engine and time helpers.
"""
from linguascape.utils.srs_algorithm import (
    SRSEngine,
    srs_engine,
    grade_review,
    select_due_items,
    initialize_review_state
)

__all__ = [
    "SRSEngine", "srs_engine",
    "grade_review", "select_due_items", "initialize_review_state"
]
