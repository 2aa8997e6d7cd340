"""
LinguaScape SRS
Spaced repetition scheduling for vocabulary flashcards.
"""
__version__ = "0.1.0"
