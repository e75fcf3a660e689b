"""Custom exception hierarchy for the letter wheel game."""


class LetterWheelError(Exception):
    """Base exception for puzzle generation and play failures."""


class VocabularyLoadError(LetterWheelError):
    """Raised when a vocabulary list cannot be fetched or parsed."""


class NoSuitablePuzzle(LetterWheelError):
    """Raised when no playable puzzle exists for a difficulty and date."""


class PlacementError(LetterWheelError):
    """Raised when a word is stamped onto the grid at an illegal position."""


class ValidationError(LetterWheelError):
    """Raised when the layout integrity checks fail."""


class ChatError(LetterWheelError):
    """Raised when the chat companion cannot produce an answer."""
