"""Shared constants and enumerations for the letter wheel game."""

from __future__ import annotations

from enum import Enum
from typing import FrozenSet, Tuple


class Difficulty(str, Enum):
    """Vocabulary levels, named after the CEFR bands of the word lists."""

    A1 = "a1"
    A2 = "a2"
    B1 = "b1"
    B2 = "b2"


class Orientation(str, Enum):
    """Word orientations supported by the crossword layout."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def step(self) -> Tuple[int, int]:
        return (0, 1) if self is Orientation.HORIZONTAL else (1, 0)

    @property
    def lateral_steps(self) -> Tuple[Tuple[int, int], Tuple[int, int]]:
        if self is Orientation.HORIZONTAL:
            return ((-1, 0), (1, 0))
        return ((0, -1), (0, 1))


VOWELS: FrozenSet[str] = frozenset("AEIOU")
GOOD_LETTERS: FrozenSet[str] = VOWELS | frozenset("SRNLTCDMP")

BASE_ORDINAL = 0
BASE_ROW = 10
BASE_COL = 5

DEFAULT_BASE_HINT = "Palabra principal"
DEFAULT_TARGET_HINT = "Sin pista"
